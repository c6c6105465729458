"""
Entry point for the Mortgage Payment Calculator.

Usage:
    python main.py          # launches the web app at localhost:5000
    python main.py --cli    # runs the terminal interface
"""

import argparse
import logging

import config as cfg


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Mortgage Payment Calculator",
    )
    parser.add_argument(
        "--cli",
        action="store_true",
        help="Run in terminal mode instead of launching the web app",
    )
    parser.add_argument("--host", default=cfg.HOST, help="Web server host")
    parser.add_argument("--port", type=int, default=cfg.PORT, help="Web server port")
    parser.add_argument(
        "--no-browser",
        action="store_true",
        help="Do not open a browser window when the web app starts",
    )
    parser.add_argument(
        "--pdf",
        default=cfg.PDF_PATH,
        help="Where the CLI writes its PDF report",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.cli:
        from cli import run_cli
        run_cli(args.pdf)
    else:
        from app import run_web
        run_web(args.host, args.port, open_browser=not args.no_browser)


if __name__ == "__main__":
    main()
