"""
Application Layer for the progression engine.

This package contains:
- ports/: Abstract repository interfaces (what the engine needs)
- use_cases/: Orchestration of the engine components and the ports
- exceptions: Error taxonomy shared with the infrastructure layer
"""
