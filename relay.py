"""Run the chat relay: python relay.py"""

import logging

from config.settings import get_settings
from src.chat.relay import create_app

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

app = create_app()

if __name__ == "__main__":
    port = get_settings().CHAT_RELAY_PORT
    logging.getLogger(__name__).info("Chat relay listening on http://localhost:%d/api/chat", port)
    app.run(host="127.0.0.1", port=port)
