import logging

from youth_ministry.main import create_app

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

app = create_app()


if __name__ == "__main__":
    app.run(debug=app.config.get("DEBUG", False))
