#!/usr/bin/env python3
"""
Flask entry point for the FAQ bot.

Configuration comes from environment variables (or a local .env file).
Run with `python app.py` for development or `gunicorn app:app` in production.
"""
import logging
import os

from dotenv import load_dotenv

from faq_bot.api import create_app

load_dotenv()

logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler()]
)
logging.getLogger("httpx").setLevel(logging.WARNING)

app = create_app()


if __name__ == "__main__":
    port = int(os.environ.get("PORT", "8000"))
    app.run(host="0.0.0.0", port=port, debug=False)
