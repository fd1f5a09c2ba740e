"""Core Layer — pure domain rules, no IO, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - All functions are pure and deterministic; Protocols only describe
      the async collaborators the shell provides

Design Decisions:
    - Functional core separated from imperative shell: validation and the invoice
      state machine are testable without a database
"""
