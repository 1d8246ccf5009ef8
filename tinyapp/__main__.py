import logging

from . import config, create_app


def main():
    logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    app = create_app()
    app.run(host="0.0.0.0", port=config.PORT)


if __name__ == "__main__":
    main()
