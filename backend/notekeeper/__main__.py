"""
NoteKeeper — Command-line entry point.

    python -m notekeeper
    notekeeper            (console script)

Host, port, timeouts and log level come from the environment; see config.py.
"""

from notekeeper.main import app, setup_logging
from notekeeper.server import NoteServer


def main() -> None:
    setup_logging()
    NoteServer(app).run()


if __name__ == "__main__":
    main()
