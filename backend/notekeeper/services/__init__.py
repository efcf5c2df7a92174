# Services package init
"""
NoteKeeper — Services Layer
=============================

Service Inventory:
    - NoteService: create / get / update / delete over the injected NoteStore
"""
