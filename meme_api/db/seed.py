"""Seed database with sample memes for development."""

import logging

from ..config import get_settings
from . import get_core, init_db

logger = logging.getLogger(__name__)


SAMPLE_MEMES = [
    {
        "title": "Distracted Boyfriend",
        "description": "Looking at the new framework while the old one watches",
        "image_url": "https://i.imgflip.com/1ur9b0.jpg",
    },
    {
        "title": "This Is Fine",
        "description": "Production is on fire and the dashboard is green",
        "image_url": "https://i.imgflip.com/wxica.jpg",
    },
    {
        "title": "Drake Hotline Bling",
        "description": None,
        "image_url": "https://i.imgflip.com/30b1gx.jpg",
    },
    {
        "title": "Two Buttons",
        "description": "Ship on Friday or write the tests",
        "image_url": "https://i.imgflip.com/1g8my4.jpg",
    },
    {
        "title": "Change My Mind",
        "description": "Tabs are better than spaces",
        "image_url": "https://i.imgflip.com/24y43o.jpg",
    },
]


def seed_memes(database_path: str) -> int:
    """Insert SAMPLE_MEMES into an empty memes table.

    Returns:
        Number of memes inserted (0 if the table already had rows)
    """
    init_db(database_path)

    with get_core(atomic=True, database_path=database_path) as core:
        if core.meme.count() > 0:
            logger.info("Memes table already populated, skipping seed")
            return 0

        for meme in SAMPLE_MEMES:
            core.meme.create(
                title=meme["title"],
                image_url=meme["image_url"],
                description=meme["description"],
            )

    logger.info(f"Seeded {len(SAMPLE_MEMES)} memes into {database_path}")
    return len(SAMPLE_MEMES)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    seed_memes(get_settings().database_path)
