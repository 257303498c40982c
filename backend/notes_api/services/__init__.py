# Services package init
"""
Notes API — Services Layer
===========================

What:  Business logic layer sitting between routes (HTTP) and database (persistence).
How:   Services take the session for each call, apply the note rules, and
       return response models or raise application exceptions.

Service Inventory:
    - validation: Note field rules, sort/dir whitelists, paging clamps
    - note_query: NoteQuery, the listing query engine (filter, count, order, page)
    - note_service: NoteService, the create/get/update/delete/list operations
"""
