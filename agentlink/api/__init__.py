"""AgentLink API Module

Provides HTTP endpoints for:
- Webhook event reception
- Webhook health reporting
"""

from flask import Blueprint

# Create API blueprint
api = Blueprint('api', __name__)

# Import and register blueprints
from .routes.webhooks import webhooks_bp

api.register_blueprint(webhooks_bp)
