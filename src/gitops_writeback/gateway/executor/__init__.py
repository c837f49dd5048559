"""Process execution gateway.

Import from submodules:
- abc: Executor
- types: ExecutionResult, ProcessExitError, ProcessLaunchError
- real: RealExecutor
- fake: FakeExecutor
"""
