"""
Service layer abstraction.

Services encapsulate the operations on a domain.  They receive the
store handle explicitly so that handlers, tests and alternative
backends can supply their own.
"""
