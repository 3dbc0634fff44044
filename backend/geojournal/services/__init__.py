# Services package init
"""
GeoJournal Backend — Services Layer
====================================

What:  Handler logic sitting between routes (HTTP) and the Data Store Gateway.
Why:   Routes handle HTTP; services validate-then-act and classify errors.

Service Inventory:
    - GeocodingService (abstract): place name → coordinates
    - GoogleGeocodingService: Google Maps Geocoding API over httpx
    - EntryService: get / list-by-author / create / update / delete entries
    - UserService: list users, signup, login
"""
