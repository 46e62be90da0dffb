#!/usr/bin/env python3
"""
Test runner for the terminal trivia game.
Runs the unit test modules and prints a summary report.
"""
import sys
import time
import unittest
from pathlib import Path

# Project root, so that both trivia and tests are importable
sys.path.insert(0, str(Path(__file__).parent.parent))

TEST_MODULES = {
    'config': 'tests.test_config_manager',
    'decoder': 'tests.test_text_decoder',
    'engine': 'tests.test_quiz_engine',
    'client': 'tests.test_trivia_client',
    'terminal': 'tests.test_terminal',
    'game': 'tests.test_game',
    'main': 'tests.test_main',
}


def load_suite(module_names):
    """Load the given test modules into one suite."""
    loader = unittest.TestLoader()
    suite = unittest.TestSuite()

    for module_name in module_names:
        try:
            suite.addTest(loader.loadTestsFromName(module_name))
            print(f"✓ Loaded tests from {module_name}")
        except Exception as e:
            print(f"✗ Failed to load {module_name}: {e}")

    return suite


def run_test_suite(module_names):
    """Run the test modules and print a summary report."""
    print("=" * 70)
    print("Terminal Trivia - Test Suite")
    print("=" * 70)

    suite = load_suite(module_names)

    print("\n" + "=" * 70)
    print("Running Tests...")
    print("=" * 70)

    runner = unittest.TextTestRunner(verbosity=2, stream=sys.stdout, buffer=True)

    start_time = time.time()
    result = runner.run(suite)
    end_time = time.time()

    total_tests = result.testsRun
    failures = len(result.failures)
    errors = len(result.errors)
    skipped = len(result.skipped)
    passed = total_tests - failures - errors - skipped

    print("\n" + "=" * 70)
    print("Test Summary Report")
    print("=" * 70)
    print(f"Total Tests Run: {total_tests}")
    print(f"Passed: {passed}")
    print(f"Failed: {failures}")
    print(f"Errors: {errors}")
    print(f"Skipped: {skipped}")
    print(f"Success Rate: {(passed/total_tests)*100:.1f}%" if total_tests > 0 else "N/A")
    print(f"Execution Time: {end_time - start_time:.2f} seconds")

    return result.wasSuccessful()


if __name__ == '__main__':
    if len(sys.argv) > 1:
        category = sys.argv[1]
        if category not in TEST_MODULES:
            print(f"Unknown category: {category}")
            print(f"Available categories: {', '.join(TEST_MODULES)}")
            sys.exit(2)
        success = run_test_suite([TEST_MODULES[category]])
    else:
        success = run_test_suite(list(TEST_MODULES.values()))

    sys.exit(0 if success else 1)
