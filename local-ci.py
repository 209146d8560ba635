#!/usr/bin/env python
"""
 * Copyright(c) 2021 ZettaScale Technology and others
 *
 * This program and the accompanying materials are made available under the
 * terms of the Eclipse Public License v. 2.0 which is available at
 * http://www.eclipse.org/legal/epl-2.0, or the Eclipse Distribution License
 * v. 1.0 which is available at
 * http://www.eclipse.org/org/documents/edl-v10.php.
 *
 * SPDX-License-Identifier: EPL-2.0 OR BSD-3-Clause

This Python file runs the lint and test steps of CI for local development.
"""

import os
import sys
import argparse
import subprocess


root = os.path.abspath(os.path.dirname(__file__))


def parse_arguments(args) -> argparse.Namespace:
    """
    Parse local-ci arguments, resulting namespace contains:
     * 'install', 'no_linter', 'no_tests', 'coverage', 'quiet', 'fuzzing'
    """
    parser = argparse.ArgumentParser()
    parser.add_argument("-i", "--install", action="store_true", default=False,
                        help="Reinstall typelayout in editable mode with the dev extra.")

    parser.add_argument("--no-linter", action="store_true", default=False,
                        help="Disable flake8 linting.")

    parser.add_argument("--no-tests", action="store_true", default=False,
                        help="Disable the pytest testsuite.")

    parser.add_argument("-c", "--coverage", action="store_true", default=False,
                        help="Report test coverage of the typelayout package.")

    parser.add_argument("-q", "--quiet", action="store_true", default=False,
                        help="Suppress all tool output.")

    parser.add_argument("-f", "--fuzzing", nargs="*", metavar="KEY=VALUE", default=None,
                        help="Also run the randomized layout checks, e.g. -f num_types=200 type_seed=3")

    return parser.parse_args(args)


def install(output):
    """Install typelayout into active python env"""
    subprocess.check_call(
        [sys.executable, "-m", "pip", "install", "-e", root + "[dev]"],
        **output)


def linter(output):
    """Run flake8 linting"""
    # Linter - critical -
    subprocess.check_call(
        [sys.executable, "-m", "flake8", "--select=E9,F63,F7,F82", "--show-source", "typelayout", "tests"],
        cwd=root,
        **output)

    # Linter - lax -
    subprocess.check_call(
        [sys.executable, "-m", "flake8", "--exit-zero", "--max-line-length=127", "typelayout", "tests"],
        cwd=root,
        **output)


def tests(output, coverage, fuzzing):
    """Run tests with pytest"""
    command = [sys.executable, "-m", "pytest", os.path.join(root, "tests")]
    if coverage:
        command += ["--cov=typelayout", "--cov-report=term-missing"]
    if fuzzing is not None:
        command += ["--fuzzing"] + fuzzing
    subprocess.check_call(command, cwd=root, **output)


if __name__ == "__main__":
    args = parse_arguments(sys.argv[1:])

    output = dict(stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL) if args.quiet else dict()

    if args.install:
        install(output)

    if not args.no_linter:
        linter(output)

    if not args.no_tests:
        tests(output, args.coverage, args.fuzzing)
