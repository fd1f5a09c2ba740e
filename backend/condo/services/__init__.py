"""Services Layer — reservation and payment workflows over the database.

Invariants:
    - Every write operation runs inside exactly one atomic() block
    - Stores (SlotLedger, InvoiceStore) flush but never commit; the calling
      service owns the transaction

Design Decisions:
    - One file per component for locality
    - Imperative shell around pure rules from core/
"""
