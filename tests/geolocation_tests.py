import asyncio
import unittest
from unittest.mock import AsyncMock, patch

from components import geolocation
from components.geolocation import BrowserGeolocator
from core.errors import GeolocationError


class BrowserGeolocatorTests(unittest.IsolatedAsyncioTestCase):
    def _patch_js(self, **kwargs):
        return patch.object(geolocation.ui, 'run_javascript', AsyncMock(**kwargs))

    async def test_returns_float_position(self):
        with self._patch_js(return_value={'lat': 48.85, 'lng': '2.35'}) as run_js:
            position = await BrowserGeolocator().current_position(timeout=3.0)

        self.assertEqual(position, (48.85, 2.35))
        self.assertIsInstance(position[1], float)
        code = run_js.await_args.args[0]
        self.assertIn('getCurrentPosition', code)
        self.assertIn('{timeout: 3000}', code)
        self.assertEqual(run_js.await_args.kwargs['timeout'], 4.0)

    async def test_timeouts_become_geolocation_errors(self):
        for error in (TimeoutError('no response'), asyncio.TimeoutError()):
            with self.subTest(error=type(error).__name__):
                with self._patch_js(side_effect=error):
                    with self.assertRaises(GeolocationError):
                        await BrowserGeolocator().current_position(timeout=1.0)

    async def test_bad_results_become_geolocation_errors(self):
        results = [
            {'error': 'User denied Geolocation'},
            {'error': 'Geolocation is not supported'},
            None,
            'ok',
            {'lat': 'x', 'lng': 1.0},
            {'lat': 1.0},
            {'lat': None, 'lng': 1.0},
        ]
        for result in results:
            with self.subTest(result=result):
                with self._patch_js(return_value=result):
                    with self.assertRaises(GeolocationError):
                        await BrowserGeolocator().current_position()

    async def test_error_message_is_kept(self):
        with self._patch_js(return_value={'error': 'User denied Geolocation'}):
            with self.assertRaisesRegex(GeolocationError, 'User denied Geolocation'):
                await BrowserGeolocator().current_position()


if __name__ == "__main__":
    unittest.main()
