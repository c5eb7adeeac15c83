"""
Main NiceGUI application for the clergy roster console.
"""

from nicegui import ui

from clergy_roster.config import Settings, settings as default_settings
from clergy_roster.logging_config import get_logger, setup_logging
from clergy_roster.store import create_store
from clergy_roster.store.gateway import RecordStoreGateway
from clergy_roster.ui.roster_view import RosterView


logger = get_logger(__name__)


def bind_to_client(client, view: RosterView):
    """Tie the view's subscription to the client's lifetime.

    Disconnect also fires on reconnect; only a deleted client ends the view.
    """
    client.on_delete(view.stop)


def register_pages(store: RecordStoreGateway, settings: Settings):
    """Register the roster page. Each client gets its own view and subscription."""

    @ui.page("/")
    async def index():
        view = RosterView(store, settings)
        view.render()
        view.start()
        bind_to_client(ui.context.client, view)


def run_app(settings: Settings = default_settings):
    setup_logging(settings.log_level)
    store = create_store(settings.store)
    if not store.configured:
        logger.warning("Record store is not configured; sample data will be shown")
    register_pages(store, settings)
    logger.info("Starting %s on port %d", settings.ui.title, settings.ui.port)
    ui.run(title=settings.ui.title, port=settings.ui.port, reload=settings.ui.reload)


if __name__ in {"__main__", "__mp_main__"}:
    run_app()
