# raycub

`raycub` reads a `.cub` scene description and shows it as a first-person
maze drawn by a grid raycaster. The window is 1100×750 pixels with a 60°
field of view. Each screen column shows one textured wall slice, with a flat
ceiling colour above and a flat floor colour below.

## Installing

```
pip install .
```

Run `pip install .[test]` to install `pytest` for the test suite.

## Running

```
raycub path/to/scene.cub
```

The same entry point can also be started with `python -m raycub.app`.

Controls:

| Key          | Action               |
|--------------|----------------------|
| `W` / `S`    | move forward / back  |
| `A` / `D`    | strafe left / right  |
| `←` / `→`    | turn left / right    |
| `Esc`        | quit                 |

Closing the window also quits. Held keys repeat. Walls block movement.

When the arguments or the scene are invalid, the program writes `Error` and
a reason to standard error and exits with status 1. If a single line of the
file caused the error, that line and its index are printed to standard
output. If the walls do not enclose the map, the map rows are printed to
standard output with the offending row highlighted.

## The `.cub` format

```
NO ./textures/north.xpm
SO ./textures/south.xpm
WE ./textures/west.xpm
EA ./textures/east.xpm

F 220,100,0
C 225,30,0

111111
100101
1010N1
111111
```

* Exactly one command-line argument is accepted. It must end in `.cub` and
  name a readable file that is not a directory.
* `NO`, `SO`, `WE` and `EA` each appear exactly once and name texture files
  ending in `.xpm`. These files must exist and must not be directories.
* `F` (floor) and `C` (ceiling) each appear exactly once. Each holds three
  comma-separated values from 0 to 255, with at most three digits each.
* The map comes after the identifier lines, and the last line of the file
  must be a map line. The map may use only `0`, `1`, space, and exactly one
  player start `N`, `S`, `E` or `W`. The map may not contain empty lines.
  A flood fill from the player must stay inside the `1` walls: it may not
  reach a space or the edge of the map.

Textures are read as XPM text. Colours may be given as `#RGB`-style
hexadecimal values, as `None` (transparent), or as one of a few names:
black, white, red, green, blue, yellow, cyan, magenta and gray/grey.

## Library use

```python
from raycub.parser import parse_scene
from raycub.app import run

scene = parse_scene("maps/demo.cub")
run(scene)
```

`raycub.parser.parse_scene` reads and checks a file and returns a
`raycub.scene.Scene`. `parse_lines` runs the same checks on lines that are
already loaded, and skips the checks that open texture files. When a scene
is rejected, both raise `raycub.scene.CubError` or one of its subclasses:
`LineError`, which carries `index` and `line`, or `MapError`, which carries
`grid` and `row`.

Rendering does not need a window. `raycub.texture.load_textures(scene)`
loads the wall images. `raycub.raycast.Renderer(scene, textures).cast(player)`
returns a `Frame` whose `pixels` is a NumPy array of packed `0xTTRRGGBB`
values. `raycub.app.Game` combines a scene, a player placed by
`raycub.movement.player_from_grid` and a renderer. `Game.handle_key` takes
pygame key codes and `Game.frame()` returns the current view.

## What it does not do

There are no sprites, doors, minimap, sound or mouse look. The view shows
only textured walls over flat floor and ceiling colours. The XPM reader
understands only the colour names listed above.