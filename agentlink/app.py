from typing import Mapping, Optional

from dotenv import load_dotenv
from flask import Flask

from agentlink.api import api
from agentlink.api.routes.webhooks import register_handlers
from agentlink.config import Config, get_config
from agentlink.core.protocols import Handler
from agentlink.extensions import limiter
from agentlink.utils.logging import configure_logging


def create_app(
    config: Optional[Config] = None,
    handlers: Optional[Mapping[str, Handler]] = None,
):
    """Application factory function"""
    load_dotenv()  # Load environment variables from .env

    app = Flask(__name__)

    # Configuration
    config = config or get_config()
    app.config.update(config.to_mapping())

    # Configure logging
    configure_logging(app.config["LOG_LEVEL"])
    app.logger.info("Configuring AgentLink", extra={"config": repr(config)})

    # Initialize rate limiter
    limiter.init_app(app)

    # Register blueprints
    app.register_blueprint(api, url_prefix="/api")

    register_handlers(app, handlers)

    return app


if __name__ == "__main__":
    app = create_app()
    app.run(host="0.0.0.0", port=5001, debug=app.config["DEBUG"])
