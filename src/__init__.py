"""AWS Config Aggregation Authorizations - Main Package.

This package manages AWS Config aggregation authorizations as declared
resources: create, refresh, import and delete them against the Config
service.
"""

__version__ = "1.0.0"
