"""
Core Module

Domain contracts and pure building blocks of the cache-aside layer:

- **config/**: Settings and constants
- **exceptions/**: Error hierarchy
- **interfaces/**: Backend, entity, feeder, repository and metrics protocols
- **logging/**: structlog setup and operation-ID correlation
- **serialization.py**: Versioned envelope codec
- **keys.py**: Cache key construction
- **ttl.py**: TTL policies
- **strategy.py**: Cache strategies
"""
