"""
components/layout.py
────────────────────
Application shell for the workout map.

Owns:
  • Sidebar scaffolding (branding, form slot, workout list slot, actions)
  • Map area container

Does not own:
  • Domain/business handlers (injected callbacks)
  • The form, list and map widgets themselves (built into the slots)
"""
from __future__ import annotations

from nicegui import ui

from constants import UI_COPY


class AppShell:
    """Encapsulates app-level shell scaffolding."""

    def __init__(self, form, workout_list, callbacks=None):
        self.form = form
        self.workout_list = workout_list
        self.callbacks = callbacks or {}

        self.map_container = None
        self.export_btn = None
        self.reset_btn = None
        self.reset_dialog = None

    def build(self):
        """Build the full shell (sidebar + map area)."""
        with ui.row().classes('w-full h-screen m-0 p-0 gap-0 no-wrap overflow-hidden'):
            self.build_sidebar()
            self.map_container = ui.element('div').classes('flex-1 h-screen')
        return self

    def build_sidebar(self):
        """Create fixed left sidebar with form, list and actions."""
        on_export_csv = self.callbacks.get('on_export_csv')

        with ui.column().classes('w-96 bg-zinc-900 p-4 h-screen flex-shrink-0 gap-3'):
            ui.label(f"🗺️ {UI_COPY['app_title']}").classes(
                'text-2xl font-black tracking-tight text-white mb-4'
            )

            self.form.build()

            with ui.scroll_area().classes('w-full flex-1'):
                self.workout_list.build()

            ui.separator().classes('my-3 bg-zinc-800')
            ui.label('ACTIONS').classes('text-[10px] text-zinc-500 font-semibold tracking-[0.10em] mb-1')
            with ui.row().classes('w-full gap-2 no-wrap'):
                self.export_btn = ui.button(
                    'EXPORT CSV',
                    on_click=on_export_csv,
                    icon='download',
                ).classes('flex-1 bg-zinc-800 text-white hover:bg-zinc-700').props('flat')
                self.reset_btn = ui.button(
                    'RESET',
                    on_click=self.confirm_reset,
                    icon='delete_sweep',
                ).classes('flex-1 bg-zinc-800 text-white hover:bg-zinc-700').props('flat')

            self._build_reset_dialog()

    def _build_reset_dialog(self):
        on_reset = self.callbacks.get('on_reset')

        def _confirm():
            self.reset_dialog.close()
            if callable(on_reset):
                on_reset()

        self.reset_dialog = ui.dialog()
        with self.reset_dialog, ui.card().classes('bg-zinc-900 border border-white/10 p-6'):
            ui.label('Delete all workouts?').classes('text-white font-medium text-lg')
            ui.label('This removes every saved workout and cannot be undone.').classes(
                'text-sm text-zinc-400'
            )
            with ui.row().classes('w-full justify-end gap-2 mt-2'):
                ui.button('Cancel', on_click=self.reset_dialog.close).props('flat')
                ui.button('Delete', on_click=_confirm, color='red')

    def confirm_reset(self):
        self.reset_dialog.open()
