"""
Purpose: Flask server exposing the land router.
Dependencies: flask, server/routes/route.py.
Ext Hooks: Add more routes.
Client/Server: Server for logic.
"""

import logging
import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from flask import Flask
from server.routes.route import bp as route_bp


def create_app():
    app = Flask(__name__)
    app.register_blueprint(route_bp)
    return app


app = create_app()

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    app.run(debug=True)
