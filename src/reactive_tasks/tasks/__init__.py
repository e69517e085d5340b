"""
Controller subsystem.

Components:
- task_models.py: data structures (TaskSlot, TaskStatus, OperationFailure)
- controller_base.py: channel delegation, in-flight bookkeeping, producer calls
- single.py: SingleTaskController
- multi.py: MultiTaskController
"""
