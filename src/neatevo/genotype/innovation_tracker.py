"""
NEAT Innovation Tracker Module

This module implements the InnovationTracker class for the
NEAT (NeuroEvolution of Augmenting Topologies) algorithm.

Classes:
    InnovationTracker: Registry of innovation numbers for connections
"""

import threading

class InnovationTracker:
    """
    Tracks structural changes across all genomes of a run.

    Ensures the same structural change (a connection between the same pair of
    node IDs) gets the same innovation number, whichever genome or generation
    asks for it. This is what lets crossover treat same-numbered genes from
    different genomes as "the same gene".

    A tracker is an explicit resource: create one per run and pass it to every
    operation that needs it. Allocation is serialized by a lock, so a single
    tracker may be shared by several threads; it must never be sharded.

    Public Attributes:
        innovations: innovation number => (node_in, node_out) that first produced it

    Public Methods:
        get_innovation_number(node_in, node_out): Get (or allocate) an innovation number
    """

    def __init__(self):
        self.innovations : dict[int, tuple[int, int]] = {}   # innovation number -> (node_in, node_out)
        self._numbers    : dict[tuple[int, int], int] = {}   # (node_in, node_out) -> innovation number
        self._lock = threading.Lock()

    def get_innovation_number(self, node_in: int, node_out: int) -> int:
        """
        Get innovation number for a connection, identified by its endpoints.
        Returns existing innovation number if this connection was created
        before, otherwise assigns the next sequential number (starting at 1).

        Parameters:
            node_in:  node ID for the 'from' end of the connection
            node_out: node ID for the 'to'   end of the connection

        Returns:
            connection ID (a.k.a. innovation number)
        """
        key = (int(node_in), int(node_out))

        with self._lock:
            # This is a new connection
            if key not in self._numbers:
                number = len(self.innovations) + 1
                self._numbers[key] = number
                self.innovations[number] = key
            return self._numbers[key]

    def __len__(self):
        return len(self.innovations)

    def __contains__(self, key):
        return key in self._numbers

    def __getstate__(self):
        state = self.__dict__.copy()
        del state['_lock']
        return state

    def __setstate__(self, state):
        self.__dict__.update(state)
        self._lock = threading.Lock()
