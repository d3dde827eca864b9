"""Aircraft systems package.

Holds the fuel models. Each system exposes its state as a snapshot
dataclass so front ends never reach into live objects.
"""
