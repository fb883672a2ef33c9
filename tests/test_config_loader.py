import os
import tempfile
import textwrap
import unittest
from pathlib import Path
from unittest import mock

from account_assertions.config_loader import (
    DEBUG_ASSERTIONS_ENV,
    SpecValidationError,
    load_account_config,
    load_scenario_spec,
)


class ConfigLoaderTests(unittest.TestCase):
    def _write_spec(self, content: str) -> Path:
        tmp = tempfile.NamedTemporaryFile("w", suffix=".yaml", delete=False)
        tmp.write(textwrap.dedent(content))
        tmp.flush()
        tmp.close()
        path = Path(tmp.name)
        self.addCleanup(path.unlink, missing_ok=True)
        return path

    def setUp(self) -> None:
        patcher = mock.patch.dict(os.environ, {}, clear=False)
        patcher.start()
        self.addCleanup(patcher.stop)
        os.environ.pop(DEBUG_ASSERTIONS_ENV, None)

    def test_load_valid_spec(self) -> None:
        path = self._write_spec(
            """
            account:
              starting_balance: 1000.0
            scenarios:
              - name: Verified Success Withdrawal
                withdrawals: [200]
                expect:
                  balance: 800.0
              - name: Verify Multiple Conditions
                group: Account State Check
                withdrawals: [100]
            """
        )

        spec = load_scenario_spec(path)
        self.assertEqual(spec.account.starting_balance, 1000.0)
        self.assertFalse(spec.account.debug_assertions)
        self.assertEqual(len(spec.scenarios), 2)
        self.assertEqual(spec.scenarios[0].withdrawals, [200.0])
        self.assertEqual(spec.scenarios[0].group, "Verified Success Withdrawal")
        self.assertEqual(spec.scenarios[1].group, "Account State Check")
        self.assertIsNone(spec.scenarios[1].debug_assertions)

    def test_account_section_is_optional(self) -> None:
        path = self._write_spec(
            """
            scenarios:
              - name: Only
            """
        )

        spec = load_scenario_spec(path)
        self.assertEqual(spec.account.starting_balance, 1000.0)
        self.assertEqual(spec.scenarios[0].withdrawals, [])

    def test_missing_file_rejected(self) -> None:
        with self.assertRaises(SpecValidationError):
            load_scenario_spec("/nonexistent/scenarios.yaml")

    def test_rejects_empty_scenarios(self) -> None:
        path = self._write_spec(
            """
            account: {}
            scenarios: []
            """
        )

        with self.assertRaises(SpecValidationError):
            load_scenario_spec(path)

    def test_rejects_non_numeric_withdrawal(self) -> None:
        path = self._write_spec(
            """
            scenarios:
              - name: Bad
                withdrawals: [abc]
            """
        )

        with self.assertRaises(SpecValidationError):
            load_scenario_spec(path)

    def test_rejects_unknown_expectation(self) -> None:
        path = self._write_spec(
            """
            scenarios:
              - name: Bad
                expect:
                  currency: EUR
            """
        )

        with self.assertRaises(SpecValidationError) as ctx:
            load_scenario_spec(path)
        self.assertIn("currency", str(ctx.exception))

    def test_rejects_mistyped_expectation_values(self) -> None:
        bad_expectations = [
            "balance: lots",
            "balance: true",
            "balance_positive: 'yes'",
            "account_present: 1",
            "outcomes: insufficient_funds",
            "outcomes: [refunded]",
            "violation: 42",
        ]
        for expectation in bad_expectations:
            with self.subTest(expectation=expectation):
                path = self._write_spec(
                    f"""
                    scenarios:
                      - name: Mistyped
                        withdrawals: [100]
                        expect:
                          {expectation}
                    """
                )
                with self.assertRaises(SpecValidationError):
                    load_scenario_spec(path)

    def test_accepts_well_typed_expectations(self) -> None:
        path = self._write_spec(
            """
            scenarios:
              - name: Typed
                withdrawals: [100, 5000]
                expect:
                  balance: 900
                  balance_positive: true
                  account_present: true
                  outcomes: [success, insufficient_funds]
            """
        )

        spec = load_scenario_spec(path)
        self.assertEqual(spec.scenarios[0].expect["outcomes"], ["success", "insufficient_funds"])

    def test_rejects_non_mapping_root(self) -> None:
        path = self._write_spec("- just\n- a list\n")
        with self.assertRaises(SpecValidationError):
            load_scenario_spec(path)

    def test_rejects_non_numeric_starting_balance(self) -> None:
        with self.assertRaises(SpecValidationError):
            load_account_config({"starting_balance": "lots"})

    def test_env_flag_enables_debug_assertions(self) -> None:
        os.environ[DEBUG_ASSERTIONS_ENV] = "yes"
        config = load_account_config({"debug_assertions": False})
        self.assertTrue(config.debug_assertions)

    def test_env_flag_can_disable_debug_assertions(self) -> None:
        os.environ[DEBUG_ASSERTIONS_ENV] = "0"
        config = load_account_config({"debug_assertions": True})
        self.assertFalse(config.debug_assertions)


if __name__ == "__main__":
    unittest.main()
