import logging
import os
from functools import lru_cache

from app.services.storage import FileSlotStore, StateRepository

logger = logging.getLogger(__name__)

DEFAULT_DATA_DIR = "./data"


@lru_cache(maxsize=1)
def state_repository() -> StateRepository:
    """The one repository per process; every route shares its write lock."""
    data_dir = os.getenv("SPROUT_DATA_DIR", DEFAULT_DATA_DIR)
    logger.info(f"Using slot store in {os.path.abspath(data_dir)}")
    return StateRepository(FileSlotStore(data_dir))
