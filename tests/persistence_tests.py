import json
import tempfile
import unittest
from datetime import datetime, timezone
from pathlib import Path

from core.errors import PersistenceCorruption
from core.persistence import WorkoutRepository, workout_from_dict, workout_to_dict
from core.workout_factory import create_workout
from core.workouts import CyclingRecord, RunningRecord, WorkoutKind, describe
from db import DatabaseManager


def _sample_records():
    return [
        create_workout('running', (36.27, 49.99), 5, 25, 180,
                       created_at=datetime(2026, 4, 14, 7, 0, 0, 123000)),
        create_workout('cycling', (36.31, 50.02), 27, 95, 523,
                       created_at=datetime(2026, 4, 15, 18, 45)),
        create_workout('running', (36.2, 49.9), 10.5, 52, 172,
                       created_at=datetime(2026, 5, 2, 6, 10)),
    ]


class DatabaseManagerTests(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.db = DatabaseManager(str(Path(self.temp_dir.name) / "test.db"))

    def tearDown(self):
        self.temp_dir.cleanup()

    def test_set_get_remove(self):
        self.assertIsNone(self.db.get_item('workouts'))

        self.db.set_item('workouts', '[1]')
        self.db.set_item('workouts', '[2]')
        self.assertEqual(self.db.get_item('workouts'), '[2]')
        self.assertEqual(self.db.keys(), ['workouts'])

        self.db.remove_item('workouts')
        self.assertIsNone(self.db.get_item('workouts'))
        self.assertEqual(self.db.keys(), [])

    def test_reopening_keeps_data(self):
        self.db.set_item('workouts', '[]')
        reopened = DatabaseManager(self.db.db_path)
        self.assertEqual(reopened.get_item('workouts'), '[]')


class WorkoutRepositoryTests(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.db = DatabaseManager(str(Path(self.temp_dir.name) / "test.db"))
        self.repository = WorkoutRepository(self.db)

    def tearDown(self):
        self.temp_dir.cleanup()

    def test_round_trip_preserves_records_and_order(self):
        records = _sample_records()
        self.repository.save(records)

        loaded = self.repository.load()
        self.assertEqual(loaded, records)
        self.assertIsInstance(loaded[0], RunningRecord)
        self.assertIsInstance(loaded[1], CyclingRecord)

    def test_saving_twice_is_idempotent(self):
        records = _sample_records()
        self.repository.save(records)
        first_blob = self.db.get_item('workouts')
        self.repository.save(records)

        self.assertEqual(self.db.get_item('workouts'), first_blob)
        self.assertEqual(self.repository.load(), records)

    def test_save_overwrites_previous_blob(self):
        records = _sample_records()
        self.repository.save(records)
        self.repository.save(records[:1])
        self.assertEqual(self.repository.load(), records[:1])

    def test_stored_layout(self):
        run, ride, _ = _sample_records()
        self.repository.save([run, ride])
        entries = json.loads(self.db.get_item('workouts'))

        self.assertEqual(entries[0]['type'], 'running')
        self.assertEqual(entries[0]['coords'], [36.27, 49.99])
        self.assertEqual(entries[0]['cadence'], 180)
        self.assertNotIn('elevation', entries[0])
        self.assertEqual(entries[1]['type'], 'cycling')
        self.assertEqual(entries[1]['elevation'], 523)
        self.assertNotIn('cadence', entries[1])
        self.assertEqual(entries[1]['id'], ride.id)
        self.assertEqual(entries[1]['description'], 'Cycling on April 15')

    def test_missing_or_malformed_blob_loads_empty(self):
        self.assertEqual(self.repository.load(), [])

        for blob in ('not json', '{"id": 1}', 'null', '42', '[' * 100000):
            with self.subTest(blob=blob[:20]):
                self.db.set_item('workouts', blob)
                self.assertEqual(self.repository.load(), [])

    def test_non_finite_ids_are_skipped(self):
        good = workout_to_dict(_sample_records()[0])
        for bad_id in (float('nan'), float('inf'), float('-inf')):
            with self.subTest(bad_id=bad_id):
                self.db.set_item('workouts', json.dumps([dict(good, id=bad_id), good]))
                loaded = self.repository.load()
                self.assertEqual([r.id for r in loaded], [good['id']])

        self.db.set_item('workouts', '[{"id": NaN, "type": "running"}, {"id": Infinity, "type": "cycling"}]')
        self.assertEqual(self.repository.load(), [])

    def test_unusable_entries_are_skipped(self):
        good = workout_to_dict(_sample_records()[0])
        bad_distance = dict(good, id=good['id'] + 1, distance=0)
        untyped = {'id': 5, 'coords': [1, 2], 'distance': 1, 'duration': 2}
        self.db.set_item('workouts', json.dumps([good, bad_distance, untyped, 'junk']))

        loaded = self.repository.load()
        self.assertEqual([r.id for r in loaded], [good['id']])

    def test_legacy_browser_entries_are_rebuilt(self):
        legacy = [
            {
                'date': '2026-04-14T07:00:00.000Z',
                'id': 1776150000000,
                'coords': [36.27, 49.99435],
                'distance': 5,
                'duration': 25,
                'type': 'running',
                'cadence': 180,
                'pace': '5.0',
                'description': 'Running\n      on\n      April\n      14',
            },
            {
                'id': 1776160000000,
                'coords': [36.28, 49.995],
                'distance': 20,
                'duration': 60,
                'elevation': 100,
                'speed': '20.0',
            },
        ]
        self.db.set_item('workouts', json.dumps(legacy))

        run, ride = self.repository.load()
        self.assertIsInstance(run, RunningRecord)
        self.assertEqual(run.pace, 5.0)
        self.assertEqual(run.id, 1776150000000)
        local_created = datetime(2026, 4, 14, 7, 0, tzinfo=timezone.utc).astimezone()
        self.assertEqual(run.created_at, local_created)
        self.assertEqual(run.created_at.utcoffset(), local_created.utcoffset())
        self.assertEqual(run.description, describe(WorkoutKind.RUNNING, local_created))
        self.assertIsInstance(ride, CyclingRecord)
        self.assertEqual(ride.speed, 20.0)
        self.assertEqual(ride.id, 1776160000000)

    def test_clear_removes_key(self):
        self.repository.save(_sample_records())
        self.repository.clear()
        self.assertIsNone(self.db.get_item('workouts'))
        self.assertEqual(self.repository.load(), [])

    def test_from_dict_rejects_non_objects(self):
        with self.assertRaises(PersistenceCorruption):
            workout_from_dict(['running'])
        with self.assertRaises(PersistenceCorruption):
            workout_from_dict({'id': 'abc', 'type': 'running'})


if __name__ == "__main__":
    unittest.main()
