"""Application layer: DTOs, repository ports, services and use cases.

Depends only on domain and protocol definitions; infrastructure implements
the repository protocols.
"""
