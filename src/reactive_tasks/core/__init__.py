"""
Notification primitives.

- observable.py: synchronous listener fan-out with a revision counter
- channel.py: change + error signals owned by each controller
- ports.py: callable shapes (producers, listeners, hooks)
"""
