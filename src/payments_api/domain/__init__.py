"""Domain layer - Core business logic, entities, and rules.

This layer contains:
- Entities: Objects with identity and lifecycle (e.g., Payment)
- Value Objects: Immutable objects defined by their attributes (e.g., Currency, PaymentId)
- Domain Services: Stateless operations on domain objects (cancellation fees)
- Domain Exceptions: Business rule violations

The domain layer depends on no web framework or storage; it only logs.
"""
