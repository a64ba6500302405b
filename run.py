from pricecheckbot.config import TOKEN
from pricecheckbot.logging_setup import setup_logging, log
from pricecheckbot.bot import Bot

if __name__ == "__main__":
    setup_logging()
    if not TOKEN:
        log.error("DISCORD_TOKEN is not set; add it to the environment or .env")
        raise SystemExit(1)
    bot = Bot()
    bot.run(TOKEN, log_handler=None)
