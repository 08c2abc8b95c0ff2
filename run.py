import logging
import os

import uvicorn

from seoscope import config as env
from seoscope.api.server import create_app
from seoscope.container import Container

logger = logging.getLogger(__name__)


def main(container=None):
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if container is None:
        container = Container()
    app = create_app(container)

    host = env.get_str_env("API_HOST", "0.0.0.0")
    port = env.get_int_env("API_PORT", 8080)
    logger.info("SEOScope API listening on %s:%s", host, port)
    try:
        uvicorn.run(app, host=host, port=port)
    finally:
        container.insights_service().shutdown()


if __name__ == '__main__':
    main()
