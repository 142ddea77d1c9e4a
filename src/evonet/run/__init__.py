"""
Run Package

This package drives the genetic algorithm on concrete tasks: configuration
handling, single runs (trials), multi-run experiments and run statistics.

Modules:
    config:     Config class, reading INI configuration files
    trial:      Trial base class, the evaluation environment of one run
    experiment: Experiment base class, running many independent trials
    statistics: StatisticsRecorder, writing per-generation statistics to disk

Exported Classes:
    Config, Experiment, StatisticsRecorder, Trial
"""

from evonet.run.config     import Config
from evonet.run.statistics import StatisticsRecorder
from evonet.run.trial      import Trial
from evonet.run.experiment import Experiment

__all__ = ['Config',
           'Experiment',
           'StatisticsRecorder',
           'Trial']
