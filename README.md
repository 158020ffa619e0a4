# pubrender

`pubrender` turns the object snapshots of a published page into HTML
fragments: page covers, page icons, object icons, dividers, column layouts,
files and media, and bookmark cards. It uses only the Python standard
library.

## Installing

```
pip install .
```

For running the test suite:

```
pip install ".[test]"
pytest
```

## Components

HTML is produced by small `Component` objects (`pubrender.components`).
Each has a `render()` method that returns the markup as a string, so
components can be nested freely.

```python
from pubrender.components import basic_template, blocks_wrapper, BlockWrapperParams

wrapper = blocks_wrapper(
    BlockWrapperParams(
        classes=["side left"],
        components=[basic_template("name", "My page")],
    )
)
print(wrapper.render())
# <div class="side left"><div class="name">My page</div></div>
```

Other helpers in `pubrender.components`:

- `css_classes(*args)` joins class names given as strings or lists of strings.
- `style_attribute(styles)` turns a mapping into a sanitized `style`
  attribute value, properties sorted by name.
- `escape(text)` escapes text for HTML content or quoted attributes.
- `raw(html)` embeds markup without escaping it.
- `none_template(message)` renders nothing.
- `image_with_source_template(src, class_name)` writes an `img` element.
- `block_template(params, render_child)` writes the standard block wrapper
  from a `BlockParams`, calling `render_child(child_id)` for every child
  block id and rendering what it returns.

## Data model

`pubrender.model` holds the `Block` and `Snapshot` dataclasses, the content
types a block may carry (`TextContent`, `LayoutContent`, `DivContent`,
`FileContent`, `BookmarkContent`, `LinkContent` and others) and the enums
`ObjectTypeLayout`, `RelationFormat`, `SmartBlockType`, `DivStyle`,
`FileType`, `FileStyle` and `LayoutStyle`. `make_default_block_params(block)`
gives the classes every block carries (`block`, `alignN`, `blockText`, …).

## The renderer

`pubrender.helpers.Renderer` holds what a page needs:

- `config`: a `RenderConfig` with `static_files_path`,
  `publish_files_path`, `anytype_cdn_url` and a few other settings;
- `root`: the page's own `Snapshot`;
- `blocks_by_id`: the page's blocks;
- `pb_files`: linked objects as JSON snapshot strings, keyed by paths such
  as `objects/<id>.pb`, `relations/<id>.pb`, `types/<id>.pb` and
  `filesObjects/<id>.pb`;
- `cached_pb_files`: already parsed snapshots under the same keys.

`get_object_snapshot(object_id)` looks an object up in those folders; ids
starting with `_date_` produce a date object named "Today", "Yesterday",
"Tomorrow" or e.g. "May 15, 2020" (see `date_name`). `get_file_url(file_id)`
returns `<publish_files_path>/<source>` of a file object.

```python
from pubrender.components import none_template
from pubrender.div import render_div
from pubrender.model import Block, DivContent, DivStyle

block = Block(id="b1", content=DivContent(style=DivStyle.DOTS))
html = render_div(block, lambda child_id: none_template("")).render()
```

Block and page renderers:

- `pubrender.div.render_div(block, render_child)`
- `pubrender.layout.render_layout(block, render_child)`
- `pubrender.file.render_file(renderer, block, render_child)`
- `pubrender.bookmark.render_bookmark(renderer, block, render_child)`
- `pubrender.cover.render_page_cover(renderer)`
- `pubrender.iconimage.render_page_icon_image(renderer, render_child)`
- `pubrender.iconobject.make_icon_object_params(renderer, details, props)`
  with `icon_object_template(params)` for object icons

Lower-level functions such as `pubrender.file.pretty_byte_size`,
`pubrender.iconobject.file_icon_name`, `pubrender.cover.to_cover_type` and
`pubrender.helpers.date_name` can be used on their own.

Text blocks bound to object details through their `_detailsKey` field can be
filled in with `pubrender.details.hydrate_block(block, details)`.

## Errors

Missing or mistyped snapshots raise `pubrender.helpers.SnapshotError`;
unknown or unusable covers raise `pubrender.cover.CoverError`; hydrating a
block that is not a text block raises `pubrender.details.HydrationError`.
`make_div_params` raises `TypeError` for a block without div content.

## What it does not do

- There is no command-line program and nothing that renders a whole page in
  one call: you pick the renderer for each block and supply `render_child`.
- Text, table, link, embed, relation, featured-relation and
  table-of-contents blocks have data classes but no renderers.
- Nothing is read from disk: snapshots are passed in as JSON strings or
  `Snapshot` objects.