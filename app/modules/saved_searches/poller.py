import asyncio
import logging
from app.config import settings
from app.database.supabase_client import get_service_supabase
from app.modules.saved_searches.matcher import SavedSearchChecker

logger = logging.getLogger(__name__)


async def check_all_saved_searches():
    """Run one pass over every user with an active saved search"""
    try:
        checker = SavedSearchChecker(get_service_supabase())
        notified = await asyncio.to_thread(checker.check_all_users)
        if notified:
            logger.info(f"Saved search poll sent {notified} notification(s)")
        else:
            logger.debug("Saved search poll found no new matches")
    except Exception as e:
        logger.error(f"Error in saved search poll: {str(e)}")


async def saved_search_poller_loop():
    """Background task that periodically checks saved searches for new listings"""
    interval = max(settings.saved_search_poll_minutes, 1) * 60
    while True:
        await asyncio.sleep(interval)
        try:
            await check_all_saved_searches()
        except Exception as e:
            logger.error(f"Error in saved search poller loop: {str(e)}")
