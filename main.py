#!/usr/bin/env python3
"""
Entry point for the Calculator application.

    python main.py            # scientific view (Sci button shows the panel)
    python main.py --basic    # basic keypad only
    python main.py --debug    # log every tokenization and evaluation
"""
import argparse
import logging
import sys
from pathlib import Path

# Ensure the repo root is on sys.path when run as a plain script
ROOT = Path(__file__).resolve().parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from calculator_gui.controller import ViewKind

logger = logging.getLogger("calculator")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Scientific calculator")
    parser.add_argument("--basic", action="store_true", help="start without the scientific panel")
    parser.add_argument("--debug", action="store_true", help="verbose logging")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # tkinter is only needed for the window itself
    from calculator_gui.gui import CalculatorGUI

    view = ViewKind.BASIC if args.basic else ViewKind.SCIENTIFIC
    logger.info("starting calculator (%s view)", view.value)
    app = CalculatorGUI(view=view)
    app.mainloop()


if __name__ == "__main__":
    main()
