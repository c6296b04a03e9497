"""
Example usage of the ConvertKit SDK.

Shows both API generations side by side:
- API v4 with an OAuth access token, walking tag pages with cursors
- API v3 with an API key/secret, splitting forms from landing pages
"""

import asyncio
import logging

from convertkit_sdk import ConvertKitAPIError
from convertkit_sdk import ConvertKitClient
from convertkit_sdk import ConvertKitSettings
from convertkit_sdk import LegacyConvertKitClient
from convertkit_sdk import LoggingMiddleware
from convertkit_sdk import PaginationInfo

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


async def list_all_tags(client: ConvertKitClient) -> list[dict]:
    """Follow end_cursor until the last page."""
    tags = []
    cursor = ""
    while True:
        page = await client.get_tags(after_cursor=cursor, per_page=50)
        tags.extend(page.get("tags", []))
        pagination = PaginationInfo.from_payload(page)
        if not pagination or not pagination.has_next_page:
            return tags
        cursor = pagination.end_cursor


async def demonstrate_v4(settings: ConvertKitSettings):
    async with ConvertKitClient(settings, middlewares=[LoggingMiddleware()]) as client:
        tags = await list_all_tags(client)
        logger.info(f"Account has {len(tags)} tags")

        subscriber_id = await client.get_subscriber_id("jane@acme.io")
        if subscriber_id is None:
            logger.info("Subscriber not found, creating")
            await client.create_subscriber("jane@acme.io", first_name="Jane")
        elif tags:
            await client.tag_subscriber(tags[0]["id"], subscriber_id)


async def demonstrate_v3(settings: ConvertKitSettings):
    async with LegacyConvertKitClient(settings) as client:
        forms = await client.get_forms()
        landing_pages = await client.get_landing_pages()
        logger.info(f"{len(forms)} forms, {len(landing_pages)} landing pages")


async def main():
    # Reads CONVERTKIT_API_* variables or a .env file
    settings = ConvertKitSettings()
    try:
        if settings.access_token:
            await demonstrate_v4(settings)
        if settings.api_key and settings.api_secret:
            await demonstrate_v3(settings)
    except ConvertKitAPIError as e:
        logger.error(f"Request failed: {e}")


if __name__ == "__main__":
    asyncio.run(main())
