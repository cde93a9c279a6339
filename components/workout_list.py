"""
components/workout_list.py
──────────────────────────
Sidebar list of recorded workouts, newest first.

Clicking an entry hands its id to the injected on_click callback.
"""
from __future__ import annotations

from nicegui import ui

from constants import KIND_COLORS
from core.workouts import workout_details


class WorkoutList:
    def __init__(self, callbacks=None):
        self.callbacks = callbacks or {}
        self.container = None

    def build(self):
        self.container = ui.column().classes('w-full gap-3')
        return self

    def add_entry(self, record):
        on_click = self.callbacks.get('on_click')
        accent = KIND_COLORS.get(record.kind.value, '#71717a')

        with self.container:
            card = ui.card().classes(
                f'w-full p-3 bg-zinc-800 cursor-pointer workout workout--{record.kind.value}'
            ).style(f'border-left: 5px solid {accent};')
            with card:
                ui.label(record.description).classes('text-white font-bold text-base')
                with ui.row().classes('w-full gap-4 items-baseline'):
                    for icon, value, unit in workout_details(record):
                        with ui.row().classes('gap-1 items-baseline'):
                            ui.label(icon).classes('text-sm')
                            ui.label(f'{value:g}').classes('text-white font-semibold')
                            ui.label(unit).classes('text-[10px] text-zinc-400 uppercase')

        # Newest entry goes on top
        card.move(target_index=0)
        if callable(on_click):
            card.on('click', lambda _, workout_id=record.id: on_click(workout_id))
        return card

    def clear(self):
        self.container.clear()
