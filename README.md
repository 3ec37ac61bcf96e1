# goldfish

The engine-side building blocks of a small 2D game engine. Everything here
works without a window or a sound device: drawing goes through a renderer
object you supply, and audio is mixed into plain sample arrays.

## Modules

- `goldfish.vecmath`: scalar and three-component vector helpers: `log2`,
  `absolute`, `cross`, `subtract`, `normal`, `normalize`, `cot`,
  `nearest_pow2`, and the engine's rounding rules `round_half`, `floor_int`
  and `ceil_next` (which always returns one more than the truncated value).
- `goldfish.log`: `EngineLog` streams and `log()`, which also writes to a
  process-wide default stream set with `set_default_stream()`.
- `goldfish.assertion`: `assertion_message()` builds the report text;
  `report_assertion()` prints it, sets `engine.error` and returns an
  `EngineAssertionError`.
- `goldfish.command`: quote-aware `tokenize()` and `run_commands()`, which
  understands `width`, `height` and `texture` (`nearest` or `linear`) and
  logs anything else as an unknown command. Lines starting with `#` are
  skipped.
- `goldfish.file`: `open_file()` returns an `EngineFile` (a context manager)
  for a path on disk, or for a `base:/name` entry of a resource mapping
  (read-only).
- `goldfish.input`: `InputState` with the mouse position and button flags.
- `goldfish.font`: a BDF parser (`parse_bdf`, `load_font`, `load_font_file`)
  producing a `BitmapFont` of `Glyph`s with RGBA pixels.
- `goldfish.graphic`: `Color`, `Dimension`, `fill_rect`, `draw_texture_2d`
  and bitmap text layout (`text`, `text_wrap`, `text_width`, `text_height`).
  `RecordingRenderer` records every drawing call and keeps a clip stack.
- `goldfish.gui`: `Gui`, a retained component tree with parenting, stacking
  order (`sort_components`, `move_topmost`), hit testing, dragging, resize
  grips and clicks. Component kinds can be registered by name with
  `register_kind()` and created with `create()`.
- `goldfish.audio`: `detect_format()` recognises XM, MOD, MP3, FLAC and WAV
  by their leading bytes; `AudioMixer` loads WAV data through `WavDecoder`
  (8/16/24/32-bit PCM, 32/64-bit float) and `mix()`es playing sounds into
  signed 16-bit interleaved stereo.
- `goldfish.image`: `decode_image()` / `load_image()` turn raster images into
  RGBA pixels using Pillow.
- `goldfish.network`: `network_id()` reads four characters as a big-endian
  integer; `create_socket()` makes TCP or UDP sockets with large buffers.
- `goldfish.draw`: `Draw` paces frames to 60 per second around a
  `platform_step` callable; `cursor_polygons()` gives the mouse cursor shape.
- `goldfish.client`: `Client` ties a `Draw`, an `AudioMixer` and an
  `InputState` together and runs the staged `CloseState` shutdown.
- `goldfish.core`: `Engine` applies default settings, runs
  `base:/autoexec.cfg` and `-name value` arguments as commands, and loops
  over its client. `parse_autoexec()` and `argv_to_commands()` are usable on
  their own.

## Installing

```
pip install .
```

## Examples

```python
from goldfish.command import run_commands, tokenize
from goldfish.graphic import Color, RecordingRenderer, fill_rect

config = {}
run_commands(config, ["width 1024", 'texture "nearest"'], print)
print(config)                         # {'width': 1024, 'texture': 'nearest'}
print(tokenize('say "hello world"'))  # ['say', 'hello world']

renderer = RecordingRenderer()
fill_rect(renderer, 0, 0, 10, 10, Color(255, 0, 0, 255))
print(renderer.calls)
```

```python
from goldfish.core import Engine

engine = Engine({}, argv=["game", "-width", "1024"])
print(engine.config["width"])  # 1024
```

## What it does not do

- It opens no window and draws nothing on screen; `Draw` needs a
  `platform_step` callable and drawing needs a renderer object such as
  `RecordingRenderer`.
- It plays no sound on a device; `AudioMixer.mix()` only returns samples.
  Only WAV data is decoded: XM, MOD, MP3 and FLAC are recognised and refused
  with `AudioDecodeError`.
- TrueType fonts are refused with `UnsupportedFontError`; only BDF fonts load.
- SVG images are not decoded.
- There is no scripting layer and no reader for resource pack archives:
  resources are passed in as a mapping of names to bytes.

## Running the tests

```
pip install .[test]
pytest
```