"""
NEAT Run Package

This package holds the configuration of the NEAT algorithm and the trial
driver that evolves a population through generations.

Modules:
    config: Configuration management for NEAT parameters
    trial:  Abstract base class for NEAT trials

The modules are imported directly ('from neatevo.run.config import Config');
the genotype modules depend on 'config', while 'trial' depends on them.
"""
