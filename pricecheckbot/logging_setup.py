import logging, os, sys
from .config import LOG_LEVEL

class Color:
    RESET="\x1b[0m"; GRAY="\x1b[90m"; GREEN="\x1b[32m"; YELLOW="\x1b[33m"; RED="\x1b[31m"
    BLUE="\x1b[34m"; CYAN="\x1b[36m"; BOLD="\x1b[1m"

class ColorFormatter(logging.Formatter):
    LEVELS={"DEBUG":Color.BLUE,"INFO":Color.GREEN,"WARNING":Color.YELLOW,"ERROR":Color.RED,"CRITICAL":Color.RED+Color.BOLD}

    def __init__(self, fmt="%(message)s", colored=True):
        super().__init__(fmt)
        self.colored = colored

    def _paint(self, text, color):
        return f"{color}{text}{Color.RESET}" if self.colored else text

    def format(self, rec):
        t = self._paint(self.formatTime(rec, "%H:%M:%S"), Color.GRAY)
        lvl = self._paint(f"{rec.levelname:<7}", self.LEVELS.get(rec.levelname, ""))
        name = self._paint(rec.name, Color.CYAN)
        return f"{t} | {lvl} | {name} | {super().format(rec)}"

def _wants_color(stream) -> bool:
    return not os.getenv("NO_COLOR") and hasattr(stream, "isatty") and stream.isatty()

def setup_logging(level: str = LOG_LEVEL, stream=None):
    stream = stream or sys.stderr
    root = logging.getLogger()
    root.setLevel(level)
    h = logging.StreamHandler(stream)
    h.setFormatter(ColorFormatter(colored=_wants_color(stream)))
    root.handlers[:] = [h]
    # run.py passes log_handler=None so discord.py keeps these levels
    logging.getLogger("aiohttp").setLevel(logging.WARNING)
    logging.getLogger("discord").setLevel(logging.WARNING)
    logging.getLogger("discord.client").setLevel(logging.INFO)
    logging.getLogger("discord.gateway").setLevel(logging.INFO)
    logging.getLogger("discord.ext.tasks").setLevel(logging.ERROR)

log = logging.getLogger("price-bot")
