HELP_TEXT = r'''
hexgrid CLI

Index points on a hexagonal global grid (16 resolutions, 0 = coarsest,
15 = finest) and navigate between cells.

Quick start

  # install (dev)
  python3 -m venv .venv
  source .venv/bin/activate
  pip install -U pip
  pip install -e .

  # point -> cell at resolution 10
  hexgrid encode 40.661,-73.944 --res 10

  # cell -> center and boundary
  hexgrid decode 8a2a10766d87fff
  hexgrid boundary 8a2a10766d87fff

  # hierarchy
  hexgrid parent 8a2a10766d87fff --res 4
  hexgrid children 8a2a10766d87fff --res 11
  hexgrid center-child 8a2a10766d87fff --res 15

  # neighbors within 2 steps
  hexgrid disk 8a2a10766d87fff -k 2

  # cells whose centers fall inside a polygon
  hexgrid fill --loop "40.6968,-73.9914;40.6968,-73.9795;40.6814,-73.9795;40.6814,-73.9914" --res 9

Core ideas
- A cell index is a 64-bit integer, written as lowercase hex (e.g. 8a2a10766d87fff).
- Every cell has exactly one parent at each coarser resolution.
- Hexagons have 7 children and 6 neighbors; the 12 pentagons per resolution
  have 6 children and 5 neighbors.
- Negative longitudes can look like flags; use 'lat,lon' or --lat/--lon.

Defaults
- When --res or -k is omitted, the value comes from the config file
  ($HEXGRID_HOME/config.json, else $XDG_CONFIG_HOME/hexgrid/config.json,
  else ~/.hexgrid/config.json; $HEXGRID_CONFIG_PATH overrides all three).
  See `hexgrid config show` and `hexgrid config set`.

Logging
- Pass --verbose before the command for debug output, e.g.
  hexgrid --verbose disk 8a2a10766d87fff -k 3
'''
