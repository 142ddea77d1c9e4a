#!/usr/bin/env python3
"""
Utility script to run the examples easily.

Usage:
    python scripts/run_example.py xor
    python scripts/run_example.py xor --mode experiment --num-trials 20
"""

import sys
import argparse
from pathlib import Path

from loguru import logger

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from evonet import Config
from examples.trial_XOR import Trial_XOR, Experiment_XOR


EXAMPLES = {
    'xor': {
        'trial': Trial_XOR,
        'experiment': Experiment_XOR,
        'config': 'examples/configs/config_xor.ini',
        'description': 'XOR logic problem'
    },
}


def main():
    parser = argparse.ArgumentParser(description='Run evonet examples')
    parser.add_argument('example', choices=EXAMPLES.keys(),
                        help='Example to run')
    parser.add_argument('--mode', choices=['trial', 'experiment'], default='trial',
                        help='Run single trial or full experiment')
    parser.add_argument('--num-trials', type=int, default=30,
                        help='Number of trials for experiment mode')
    parser.add_argument('--num-jobs', type=int, default=1,
                        help='Number of parallel jobs')
    parser.add_argument('--log-level', default='WARNING',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Level of the library log messages written to stderr')

    args = parser.parse_args()

    # library log messages go to stderr, at the chosen level
    logger.remove()
    logger.add(sys.stderr, level=args.log_level,
               format="{time:HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} | {message}")

    example = EXAMPLES[args.example]
    config  = Config(str(Path(__file__).parent.parent / example['config']))

    print(f"Running {example['description']} ({args.mode})")
    if args.mode == 'trial':
        trial = example['trial'](config)
        trial.run(num_jobs=args.num_jobs)
    else:
        experiment = example['experiment'](args.num_trials, config)
        experiment.run(num_jobs_trials=args.num_jobs)


if __name__ == '__main__':
    main()
