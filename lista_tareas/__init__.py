"""Lista de Tareas — task-list REST service.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
