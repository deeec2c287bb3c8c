# app.py
# Entry point for running WikiPreview with the Flask development server

import sys

from main_app import create_app

app = create_app()


if __name__ == "__main__":
    debug = app.config["DEBUG"] or "debug" in sys.argv
    app.run(debug=debug, host="127.0.0.1", port=5000)
