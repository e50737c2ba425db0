import asyncio
import logging
import os

from dotenv import load_dotenv

from stockflow.clients.woocommerce.batching import BatchConfig
from stockflow.clients.woocommerce.config import load_woocommerce_config
from stockflow.clients.woocommerce.errors import WooCommerceError
from stockflow.clients.woocommerce.factory import build_woocommerce


def configure_logging() -> logging.Logger:
    level_name = os.getenv("LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)

    return logging.getLogger(__name__)


async def report_store(logger: logging.Logger) -> None:
    config = load_woocommerce_config()
    logger.debug("WooCommerce config loaded: %s", config)

    async with build_woocommerce(config, BatchConfig.from_env()) as woocommerce:
        page = await woocommerce.products.list_page({"per_page": 1})
        logger.info(
            "Connected to %s: %s products across %s pages",
            config.base_url, page.total, page.total_pages,
        )


def main():
    load_dotenv()

    logger = configure_logging()

    try:
        asyncio.run(report_store(logger))
    except ValueError as e:
        logger.error("Error loading WooCommerce config: %s", e)
        logger.info("Aborting... Please set the required environment variables and try again.")
    except WooCommerceError as e:
        logger.error("WooCommerce request failed (%s): %s", e.kind.value, e)


if __name__ == "__main__":
    main()
