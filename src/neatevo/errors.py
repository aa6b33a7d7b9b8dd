"""
NEAT Errors Module

Exceptions raised by the NEAT core. All of them signal programming errors
on the caller's side and are not meant to be retried or swallowed.

Classes:
    NeatError:                  Base class for all NEAT errors
    InvalidArgumentError:       Wrong entity kind (or an invalid value) passed to an operation
    PreconditionViolationError: An operation was called in a state it does not accept
"""

class NeatError(Exception):
    """Base class for errors raised by the NEAT core."""

class InvalidArgumentError(NeatError, TypeError):
    """
    Raised when an operation receives the wrong kind of entity, e.g. something
    other than a NodeGene passed to 'Genome.add_node_gene()'.
    """

class PreconditionViolationError(NeatError, ValueError):
    """
    Raised when an operation's precondition does not hold, e.g. crossover
    called with the less fit parent first.
    """
