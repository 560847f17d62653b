import logging
import sys
from flask import Flask, jsonify, render_template
from flask_cors import CORS
from config import SITE_OFFLINE, HUC_SERVICE_URL

from routes import routes

# Configure logging to emit to stdout
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

# Elastic Beanstalk wants `application` to be present.
application = app = Flask(__name__)
CORS(app)

app.register_blueprint(routes)


@app.errorhandler(405)
def method_not_allowed(error):
    """The lookup endpoint only answers GET requests."""
    return jsonify({"error": "Method not allowed"}), 405


@app.route("/")
def index():
    """Render index page"""
    return render_template(
        "index.html",
        service_url=HUC_SERVICE_URL,
        SITE_OFFLINE=SITE_OFFLINE,
    )
