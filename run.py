"""
Development runner for the gallery.

Puts ``src`` on ``sys.path`` so the package runs from a checkout without
installation. Arguments are passed on to the command line interface:

    $ python run.py --sim bouncing-balls
"""
import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(os.path.abspath(__file__)), "src"))

from simgallery.__main__ import main

if __name__ == "__main__":
    sys.exit(main())
