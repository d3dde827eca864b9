"""FuelSim - aircraft fuel network simulation.

Models a wide-body fuel network (center and wing tanks, transfer pumps,
crossfeed valve) driven by engine and flight parameters.
"""

__version__ = "0.1.0"
