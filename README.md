# beacnutil

The calculations and stored settings behind configuring Beacn microphones, audio
interfaces and controllers. It uses only the Python standard library.

## Modules

- `beacnutil.biquad`: `BiquadCoefficient` and the functions that build it for
  low shelf, high shelf, bell, notch, high-pass and low-pass bands at a 48 kHz
  sample rate (`low_shelf_coefficient`, `high_shelf_coefficient`,
  `bell_coefficient`, `notch_coefficient`, `high_pass_coefficient`,
  `low_pass_coefficient`). `freq_response` gives the magnitude response in dB at
  one frequency and `freq_response_many` gives it for many.
- `beacnutil.ranges`: `map_to_range` maps a value linearly from one range to
  another and raises `ValueError` for an empty source range.
  `drag_speed_from_range` picks a drag step that crosses a range in about 150
  steps by default, kept between `1e-10` and `100`. `is_float` tells floats
  apart from other numbers. `decimals_for` returns 1 for floats, `None` for other
  real numbers, and raises `TypeError` for anything else.
- `beacnutil.dynamics`: conversions between compressor and expander ratios and
  the "amount" shown in simple mode (`compressor_ratio_to_amount`,
  `compressor_amount_to_ratio`, `expander_ratio_to_amount`,
  `expander_amount_to_ratio`), and between noise-suppressor sensitivity in dB
  (-120 to -60) and a percentage (`sensitivity_to_percent`,
  `percent_to_sensitivity`). An amount or percentage out of range raises
  `ValueError`.
- `beacnutil.eq_geometry`: `BandType`, `EqualiserBand` and `Rect`. It maps
  frequency and gain to plot coordinates and back on a logarithmic 20 Hz to
  20 kHz axis with a ±12 dB range (`freq_to_x`, `x_to_freq`, `db_to_y`,
  `y_to_db`, `plot_rect_for`). `coefficient_for` and `band_gains` turn a band
  into filter coefficients and gains; a band with no type raises `ValueError`.
  `prune_flat_points` and `adaptive_smooth_points` thin out and smooth curves.
- `beacnutil.parametric_eq`: `ParametricEq`, the interaction state of an EQ
  plot. It caches each band's response, builds the combined curve of the enabled
  bands, and handles click, drag and scroll on band points. A drag moves a band's
  gain, and its frequency too in advanced mode. A scroll changes Q by 0.2 within
  0.1 to 10, in advanced mode only. `handle_drag` returns the changed settings
  and `handle_scroll` returns the new Q.
- `beacnutil.states`: `LoadState`, `DeviceState`, `ErrorMessage`, and the
  controller's `SavedSettings` (display brightness 40, display dim 3 minutes,
  button brightness 5 by default). `settings_from_dict` validates the JSON form
  and raises `SettingsError`. `settings_to_dict` writes the JSON form.
  `load_settings` and `save_settings` keep one `<serial>.json` file per device,
  by default under `$XDG_CONFIG_HOME/beacnutil` or `~/.config/beacnutil`. A
  missing or invalid file is replaced with defaults, and failures to save are
  logged rather than raised.

## Example

```python
from beacnutil.biquad import bell_coefficient, freq_response

coeff = bell_coefficient(1000.0, 6.0, 0.7)
print(round(freq_response(1000.0, coeff), 2))  # 6.0 dB at the centre
```

```python
from pathlib import Path
from beacnutil.states import load_settings, save_settings

directory = Path("/tmp/beacn-config")
settings = load_settings("EXAMPLE-SERIAL-0001", directory)
settings.display_brightness = 60
save_settings("EXAMPLE-SERIAL-0001", settings, directory)
```

## What it does not do

The package has no user interface, window or tray icon, and no command to run.
It does not find or talk to devices over USB: nothing here sends settings to a
device or reads them back. `ParametricEq.handle_drag` and `handle_scroll` change
the given bands in memory and report what changed, and the caller passes those
changes on. Only controller settings are stored on disk. It does not set up
start-at-login.