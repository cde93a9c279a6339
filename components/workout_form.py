"""
components/workout_form.py
──────────────────────────
New-workout form shown after a map click.

Standalone NiceGUI form with callback injection; the controller decides
when it is shown and what a submit means.
"""
from __future__ import annotations

from nicegui import ui

from core.workouts import WorkoutKind

TYPE_OPTIONS = {kind.value: kind.label for kind in WorkoutKind}


class WorkoutForm:
    """Type selector plus distance/duration/cadence/elevation inputs."""

    def __init__(self, callbacks=None):
        self.callbacks = callbacks or {}

        self.container = None
        self.type_select = None
        self.distance_input = None
        self.duration_input = None
        self.cadence_input = None
        self.elevation_input = None

    def build(self):
        on_type_change = self.callbacks.get('on_type_change')

        self.container = ui.card().classes(
            'w-full bg-zinc-800 p-4 rounded-lg gap-2'
        )
        with self.container:
            with ui.grid(columns=2).classes('w-full gap-2'):
                self.type_select = ui.select(
                    options=TYPE_OPTIONS,
                    value=WorkoutKind.RUNNING.value,
                    label='Type',
                    on_change=lambda e: on_type_change(e.value) if callable(on_type_change) else None,
                ).props('outlined dense dark')
                self.distance_input = self._number('Distance', 'km')
                self.duration_input = self._number('Duration', 'min')
                self.cadence_input = self._number('Cadence', 'step/min')
                self.elevation_input = self._number('Elev Gain', 'meters')

            ui.button('ADD WORKOUT', on_click=self._submit, icon='add').classes(
                'w-full bg-zinc-700 text-white'
            ).props('flat dense')

        for field in (self.distance_input, self.duration_input, self.cadence_input, self.elevation_input):
            field.on('keydown.enter', self._submit)

        self.show_fields_for(WorkoutKind.RUNNING)
        self.hide()
        return self

    @staticmethod
    def _number(label, placeholder):
        return ui.number(label=label, placeholder=placeholder).props('outlined dense dark')

    def _submit(self, *_):
        on_submit = self.callbacks.get('on_submit')
        if callable(on_submit):
            on_submit(self.values())

    def values(self):
        return {
            'type': self.type_select.value,
            'distance': self.distance_input.value,
            'duration': self.duration_input.value,
            'cadence': self.cadence_input.value,
            'elevation': self.elevation_input.value,
        }

    def show(self):
        self.container.set_visibility(True)

    def hide(self):
        self.container.set_visibility(False)

    def clear(self):
        for field in (self.distance_input, self.duration_input, self.cadence_input, self.elevation_input):
            field.set_value(None)

    def focus_distance(self):
        self.distance_input.run_method('focus')

    def show_fields_for(self, kind):
        is_cycling = WorkoutKind(kind) is WorkoutKind.CYCLING
        self.cadence_input.set_visibility(not is_cycling)
        self.elevation_input.set_visibility(is_cycling)
        if self.type_select.value != WorkoutKind(kind).value:
            self.type_select.set_value(WorkoutKind(kind).value)
