"""
Workout Map
"""

# Standard library imports
import logging

# Third-party imports
from nicegui import ui

# Local imports
from constants import DEFAULT_DB_PATH, UI_COPY
from db import DatabaseManager
from state import AppState
from core.controller import WorkoutController
from core.persistence import WorkoutRepository
from components.geolocation import BrowserGeolocator
from components.layout import AppShell
from components.map_view import LeafletMapView
from components.workout_form import WorkoutForm
from components.workout_list import WorkoutList

logger = logging.getLogger(__name__)


class MuteFrameworkNoise(logging.Filter):
    def filter(self, record):
        # Filter out the specific NiceGUI warning about event listeners
        return "Event listeners changed after initial definition" not in record.getMessage()


# --- MAIN APPLICATION CLASS ---
class WorkoutMapApp:
    """Composition root: wires storage, views and the workout controller."""

    def __init__(self, db_path=DEFAULT_DB_PATH):
        self.db = DatabaseManager(db_path)
        self.repository = WorkoutRepository(self.db)
        self.state = AppState()

        # ── UI components ────────────────────────────────────────────────
        self.form = WorkoutForm(callbacks={
            'on_submit': self.handle_form_submit,
            'on_type_change': self.handle_type_change,
        })
        self.workout_list = WorkoutList(callbacks={
            'on_click': self.handle_list_click,
        })
        self.layout = AppShell(
            form=self.form,
            workout_list=self.workout_list,
            callbacks={
                'on_export_csv': self.export_csv,
                'on_reset': self.reset,
            },
        )
        self.map_view = None
        self.controller = None

    def build(self):
        """Build the UI shell and set up the map view."""
        self.layout.build()
        self.map_view = LeafletMapView(container=self.layout.map_container)
        self.controller = WorkoutController(
            map_view=self.map_view,
            form_view=self.form,
            list_view=self.workout_list,
            repository=self.repository,
            state=self.state,
            notify=ui.notify,
            geolocator=BrowserGeolocator(),
        )
        self.controller.on_map_ready()
        return self

    async def start(self):
        """Replay saved workouts once the map exists client-side, then geolocate."""
        await self.map_view.initialized()
        self.controller.load_saved_workouts()
        await self.controller.locate_user()

    def handle_form_submit(self, raw_fields):
        try:
            self.controller.on_form_submitted(raw_fields)
        except Exception as e:
            logger.exception("Failed to record workout")
            ui.notify(UI_COPY['unexpected_error'].format(error=e), type='negative')

    def handle_type_change(self, kind):
        self.controller.on_form_type_changed(kind)

    def handle_list_click(self, workout_id):
        try:
            self.controller.on_workout_list_clicked(workout_id)
        except Exception as e:
            logger.exception("Failed to move to workout %s", workout_id)
            ui.notify(UI_COPY['unexpected_error'].format(error=e), type='negative')

    def export_csv(self):
        try:
            path = self.controller.export_csv()
            logger.info("Exported workouts to %s", path)
            ui.notify(UI_COPY['export_done'], type='positive', timeout=5000)
        except ValueError:
            ui.notify(UI_COPY['export_empty'], type='warning')
        except Exception as e:
            logger.exception("CSV export failed")
            ui.notify(f'Error exporting CSV: {str(e)}', type='negative')

    def reset(self):
        """Purge saved workouts and return to an empty map."""
        self.controller.on_reset()
        ui.notify(UI_COPY['reset_done'], type='info')


def main(db_path=DEFAULT_DB_PATH):
    """Application entry point."""
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )
    # Suppress known NiceGUI framework listener-churn warning noise
    nicegui_logger = logging.getLogger('nicegui')
    nicegui_logger.addFilter(MuteFrameworkNoise())

    @ui.page('/')
    async def index():
        workout_app = WorkoutMapApp(db_path=db_path).build()
        await ui.context.client.connected()
        await workout_app.start()

    # Run in native mode with specified window configuration
    try:
        ui.run(
            native=True,
            window_size=(1200, 900),
            title=UI_COPY['app_title'],
            reload=False,
            dark=True  # Force dark mode for native window
        )
    except KeyboardInterrupt:
        # Graceful terminal interrupt during local development.
        pass
    except RuntimeError as e:
        msg = str(e)
        if 'Cannot close a running event loop' in msg or 'this event loop is already running' in msg:
            # uvloop teardown can surface this after Ctrl+C; treat as graceful exit.
            pass
        else:
            raise


if __name__ == "__main__":
    main()
