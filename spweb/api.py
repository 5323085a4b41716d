import logging

from flask import Flask, jsonify, request

from passgen.config import config_from_dict, config_to_dict, default_config, require_policy
from passgen.errors import PasswordConfigError
from passgen.generator import generate_password

logger = logging.getLogger(__name__)

MAX_COUNT = 20

app = Flask(__name__)


@app.after_request
def no_store(response):
    # generated secrets must not land in shared or browser caches
    response.headers["Cache-Control"] = "no-store"
    response.headers["X-Content-Type-Options"] = "nosniff"
    return response


@app.errorhandler(PasswordConfigError)
def config_error(e):
    logger.info("rejected configuration: %s", e.kind)
    return jsonify({"error": e.kind, "message": e.message}), 400


@app.route('/')
def home():
    return jsonify({
        "message": "passgen API is running"
    })


@app.route('/config', methods=['GET'])
def config_route():
    return jsonify(config_to_dict(default_config()))


@app.route('/generate', methods=['POST'])
def generate_route():
    data = request.get_json(silent=True)
    if data is None and request.get_data():
        return jsonify({"error": "BadRequest", "message": "body is not valid JSON"}), 400
    data = data or {}
    if not isinstance(data, dict):
        return jsonify({"error": "BadRequest", "message": "body must be a JSON object"}), 400
    count = data.pop('count', 1)
    if not isinstance(count, int) or isinstance(count, bool) or not 1 <= count <= MAX_COUNT:
        return jsonify({"error": "BadRequest", "message": f"count must be 1-{MAX_COUNT}"}), 400
    config = require_policy(config_from_dict(data))
    passwords = [generate_password(config) for _ in range(count)]
    return jsonify({'passwords': passwords})


if __name__ == "__main__":
    app.run(debug=True)
