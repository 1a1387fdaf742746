# fbpanel

The working parts of a lightweight desktop panel, with no GUI toolkit
attached. The package provides:

- the panel's configuration format (`fbpanel.xconf`)
- a registry of plugin classes and their instances (`fbpanel.plugin`)
- the logic behind the stock applets: battery, CPU, network and memory
  monitors, a digital clock, a generic command monitor, the application
  menu, the launch bar, a desktop switcher and the image applet

Each applet module turns system data (`/proc`, `/sys`, `.desktop` files,
command output) into the values a panel shows: levels, chart ticks,
icon names, labels and tooltip markup. It needs nothing outside the
standard library.

## Installation

```
pip install .
```

To run the tests as well:

```
pip install .[test]
pytest
```

## Configuration files

Panel profiles use a simple block format. Lines starting with `#` are
comments:

```
Plugin {
    type = cpu
    Config {
        Color = green
    }
}
```

`fbpanel.xconf` reads and writes it. A file becomes a tree of `XConf`
nodes, each with a `name` and either a `value` or child nodes (`sons`).
Names are matched without regard to case.

```python
from fbpanel import xconf

root = xconf.load("/home/me/.config/fbpanel/default", "global")
plugin = root.find("Plugin", 0)
print(plugin.get_str("type"))

config = plugin.get("Config")          # created if missing
config.get("Color").set_value("red")
xconf.save("/tmp/profile", root)
```

- `load(fname, name)` returns `None` if the file cannot be opened;
  `parse(fp, name)` reads from any iterable of lines.
- `XConf.find`, `find_all` and `get` look up children; `get_str`,
  `get_int` (with `0x`/octal prefixes understood) and `get_enum` read
  values with a default; `set_value`, `set_int` and `set_enum` write
  them. `XConfEnum` describes one choice of an enumerated option.
- `append`, `append_sons`, `unlink`, `clear` and `copy` edit the tree.
- `XConf.format` and `XConf.write` print a tree back in the same layout;
  `save(fname, xc)` writes the children of a node to a file.
- `differs(a, b)` tells whether two trees differ.
- A line that is neither `name = value`, `name {` nor `}` raises
  `XConfSyntaxError`.

## Plugins

`fbpanel.plugin.PluginRegistry` keeps `PluginClass` descriptions by type
name and counts their users. `get` and `put` take and drop a user,
`load` creates a `PluginInstance` and `release` gives it back. An
optional loader function is called for unknown type names; classes it
registers are unregistered again when their last user goes away.
`PluginInstance.start` and `stop` run the class constructor and
destructor. Failures raise `PluginError`.

## Power supplies

`fbpanel.power_supply` reads the kernel's power-supply directory and
collects the AC adapters (`AcSupply`) and batteries (`Battery`) listed
there. Battery capacity falls back to energy or charge ratios when the
capacity entry is missing.

```python
from fbpanel.power_supply import PowerSupply

ps = PowerSupply().parse("/sys/class/power_supply/")
print(ps.is_ac_online(), ps.bat_capacity())
```

The same information is available from the command line; an optional
argument names another directory to scan:

```
fbpanel-power-supply
```

It prints whether AC power is online and the average battery capacity.

## Monitors

- `fbpanel.chart`: `Chart` keeps a rolling history of up to nine rows of
  fractions, scaled to its height. `Chart.lines` yields the vertical
  segments to draw as `(row, x, y_from, y_to)`.
- `fbpanel.cpu`: `parse_cpu_stat` and `read_cpu_stat` read CPU times.
  `CpuMonitor` turns successive samples into a load fraction, a chart
  tick and a tooltip.
- `fbpanel.net`: `parse_net_dev` and `read_net_stat` read the byte
  counters of one interface. `NetMonitor` (interface `eth0` by default)
  turns them into rates in KB/s, charted against its limits.
- `fbpanel.mem`: `parse_meminfo`, `read_meminfo` and `mem_stats` give
  memory and swap usage; `MemStats.fractions` and `MemStats.tooltip`
  present it.
- `fbpanel.mem2`: `Mem2Monitor` gives the same figures as chart ticks,
  with a swap row when a swap colour is set.
- `fbpanel.meter` and `fbpanel.battery`: `Meter` picks one icon out of a
  series for a level from 0 to 100; `BatteryView`, `battery_icons` and
  `battery_tooltip` apply it to a `BatteryState`.

The `update` methods read the system files once and return whether
polling should go on; calling them on a timer is left to the caller.

## Other applets

- `fbpanel.genmon`: `GenMon` runs a shell command and shows the first
  line of its output as escaped Pango-style markup.
- `fbpanel.dclock`: `DClock` lays out a digital clock in 12 or 24 hour
  form, with or without seconds, horizontally or vertically, as glyph
  copies from a digit strip. `recolor_glyphs` repaints an RGBA strip and
  `parse_color` reads `#rgb`-style values and a few colour names.
- `fbpanel.system_menu`: `build_system_menu` builds an application menu
  from installed `.desktop` files, sorted into categories;
  `systemmenu_changed` and `dir_changed` tell whether those files
  changed since a given time.
- `fbpanel.menu`: `expand_config` replaces `systemmenu` and `include`
  entries in a menu configuration, `build_menu` turns it into `Menu` and
  `MenuItem` objects, and `MenuModel` ties both together.
- `fbpanel.launchbar`: `Launchbar` holds up to twenty `LaunchButton`s.
  `uri_list_command` and `moz_url_command` build the command to run for
  data dropped on a button.
- `fbpanel.desktop`: `DesktopSwitcher`, `wrap_desktop` and
  `desktop_labels` handle moving between workspaces and naming them.
- `fbpanel.image`: `scaled_size` fits an image to the panel's height or
  width.
- `fbpanel.run`: `run_app` and `run_app_argv` start external programs
  without waiting for them and raise `RunError` when a program cannot be
  started.

## What this package does not do

There is no panel program here: nothing opens a window, draws widgets,
docks to a screen edge, talks to the window manager or runs an event
loop. Plugins are not loaded from shared libraries; the registry only
calls a loader function you supply. The applet modules compute what a
panel would display, and a toolkit front end has to be supplied to show
it.