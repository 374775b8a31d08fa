"""Month-by-month budget planner: percentage allocations, savings goals and spending check-ins."""

__version__ = "0.1.0"
