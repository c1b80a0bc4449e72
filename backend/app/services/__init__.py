"""Services Layer — name entry use cases and payload binding.

Invariants:
    - NameEntryService owns the duplicate policy and the transaction boundary
    - Binding resolves references (geolocation) before the service is called
"""
