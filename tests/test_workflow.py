"""
Tests for the submission and screen state machines.
"""

import unittest

from screens.subject_assignment.workflow import (
    InvalidTransition,
    ScreenFlow,
    ScreenMode,
    SubmissionFlow,
    SubmissionState,
    TERMINAL_STATES,
)


class TestSubmissionFlow(unittest.TestCase):
    def test_happy_path(self) -> None:
        flow = SubmissionFlow()
        for s in (SubmissionState.VALIDATING, SubmissionState.DUPLICATE_CHECK,
                  SubmissionState.PERSISTING, SubmissionState.SUCCESS):
            flow.advance(s)
        self.assertTrue(flow.is_terminal)
        self.assertEqual(flow.history[0], SubmissionState.IDLE)
        self.assertEqual(len(flow.history), 5)

    def test_cannot_skip_validation(self) -> None:
        flow = SubmissionFlow()
        with self.assertRaises(InvalidTransition):
            flow.advance(SubmissionState.PERSISTING)
        self.assertEqual(flow.state, SubmissionState.IDLE)

    def test_terminal_states_have_no_exits(self) -> None:
        self.assertEqual(
            TERMINAL_STATES,
            {SubmissionState.REJECTED, SubmissionState.ALL_DUPLICATE,
             SubmissionState.PERSIST_ERROR, SubmissionState.SUCCESS},
        )
        flow = SubmissionFlow()
        flow.advance(SubmissionState.VALIDATING)
        flow.advance(SubmissionState.REJECTED)
        with self.assertRaises(InvalidTransition):
            flow.advance(SubmissionState.VALIDATING)


class TestScreenFlow(unittest.TestCase):
    def test_starts_browsing(self) -> None:
        flow = ScreenFlow()
        self.assertIs(flow.mode, ScreenMode.BROWSING)
        self.assertIsNone(flow.assignment_id)

    def test_edit_needs_an_id(self) -> None:
        flow = ScreenFlow()
        with self.assertRaises(InvalidTransition):
            flow.go(ScreenMode.EDITING)
        flow.go(ScreenMode.EDITING, 7)
        self.assertEqual((flow.mode, flow.assignment_id), (ScreenMode.EDITING, 7))

    def test_only_one_mode_at_a_time(self) -> None:
        flow = ScreenFlow()
        flow.go(ScreenMode.CREATING)
        with self.assertRaises(InvalidTransition):
            flow.go(ScreenMode.CONFIRMING_DELETE, 3)
        self.assertIs(flow.mode, ScreenMode.CREATING)

    def test_close_returns_to_list_with_notice(self) -> None:
        flow = ScreenFlow()
        flow.go(ScreenMode.CONFIRMING_DELETE, 3)
        flow.close(("success", "done"))
        self.assertIs(flow.mode, ScreenMode.BROWSING)
        self.assertIsNone(flow.assignment_id)
        self.assertEqual(flow.pop_notice(), ("success", "done"))
        self.assertIsNone(flow.pop_notice())

    def test_close_when_browsing_is_a_noop(self) -> None:
        flow = ScreenFlow()
        flow.close()
        self.assertIs(flow.mode, ScreenMode.BROWSING)
        self.assertIsNone(flow.pop_notice())

    def test_session_state_does_not_grow_with_navigation(self) -> None:
        flow = ScreenFlow()
        before = dict(vars(flow))
        for i in range(200):
            flow.go(ScreenMode.EDITING, i)
            flow.close()
        self.assertEqual(vars(flow), before)

    def test_reject_keeps_the_form_open(self) -> None:
        flow = ScreenFlow()
        flow.go(ScreenMode.CREATING)
        flow.reject({"time": "Please select a time"}, ("error", "Please fill in all required fields"))
        self.assertIs(flow.mode, ScreenMode.CREATING)
        self.assertEqual(flow.field_errors, {"time": "Please select a time"})
        flow.close()
        self.assertEqual(flow.field_errors, {})

    def test_filter_survives_mode_changes(self) -> None:
        flow = ScreenFlow(year_level_filter="2nd Year")
        flow.go(ScreenMode.VIEWING_ROSTER, 1)
        flow.close()
        self.assertEqual(flow.year_level_filter, "2nd Year")


if __name__ == "__main__":
    unittest.main()
