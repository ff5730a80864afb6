# Services package init
"""
TextShelf Backend - Services Layer
====================================

Service Inventory:
    - ResourceStore: In-memory collection with list/search/get/random and
      validated create/update/delete
    - bootstrap: Reads the startup JSON file and builds the store

Services know nothing about HTTP; they raise app.exceptions types and the
handlers in main.py choose status codes.
"""
