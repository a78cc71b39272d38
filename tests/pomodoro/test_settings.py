import unittest
from dataclasses import FrozenInstanceError

from pomodoro import InvalidSettingsError, SessionType, Settings


class SettingsTests(unittest.TestCase):
    def test_defaults(self) -> None:
        settings = Settings()

        self.assertEqual(1500, settings.focus_duration)
        self.assertEqual(300, settings.short_break_duration)
        self.assertEqual(900, settings.long_break_duration)
        self.assertEqual(4, settings.streaks_to_long_break)
        self.assertTrue(settings.auto_break)

    def test_minutes_views(self) -> None:
        settings = Settings(90, 45, 150, 3, False)

        self.assertEqual(1.5, settings.focus_minutes_duration)
        self.assertEqual(0.75, settings.short_break_minutes_duration)
        self.assertEqual(2.5, settings.long_break_minutes_duration)

    def test_rejects_non_positive_values(self) -> None:
        invalid = [
            dict(focus_duration=0),
            dict(short_break_duration=-1),
            dict(long_break_duration=0.0),
            dict(streaks_to_long_break=0),
            dict(focus_duration=float("nan")),
        ]
        for overrides in invalid:
            with self.subTest(overrides=overrides):
                with self.assertRaises(InvalidSettingsError):
                    Settings(**overrides)

    def test_rejects_wrong_value_types(self) -> None:
        invalid = [
            dict(focus_duration="10"),
            dict(short_break_duration=None),
            dict(long_break_duration=True),
            dict(streaks_to_long_break=2.5),
            dict(streaks_to_long_break="4"),
            dict(streaks_to_long_break=True),
        ]
        for overrides in invalid:
            with self.subTest(overrides=overrides):
                with self.assertRaises(InvalidSettingsError):
                    Settings(**overrides)

    def test_invalid_settings_error_is_value_error(self) -> None:
        with self.assertRaises(ValueError):
            Settings(streaks_to_long_break=-4)

    def test_equality_and_immutability(self) -> None:
        self.assertEqual(Settings(), Settings(1500.0, 300.0, 900.0, 4, True))
        self.assertNotEqual(Settings(), Settings(auto_break=False))

        settings = Settings()
        with self.assertRaises(FrozenInstanceError):
            settings.focus_duration = 10  # type: ignore[misc]

    def test_duration_for_session_type(self) -> None:
        settings = Settings(10, 20, 30, 1, True)

        self.assertEqual(10.0, settings.duration_for(SessionType.FOCUS))
        self.assertEqual(20.0, settings.duration_for(SessionType.SHORT_BREAK))
        self.assertEqual(30.0, settings.duration_for(SessionType.LONG_BREAK))
        self.assertEqual(0.0, settings.duration_for(SessionType.IDLE))


if __name__ == "__main__":
    unittest.main()
