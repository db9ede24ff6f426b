"""
mixfft.cli
==========

Command-line front ends.

Submodules
----------
- :mod:`mixfft.cli.mixfft_cli` : ``mixfft`` console script (argparse).
- :mod:`mixfft.cli.settings`   : JSON/CSV option defaults for subcommands.
- :mod:`mixfft.cli.image_demo` : click demo writing spectrum / low-pass images.
"""
