"""
Library API: Routes Package
============================

Route Inventory:
    - authors.py:   /author, /authors, /author/{author_id}/books
    - books.py:     /book, /books
    - members.py:   /member, /members
    - borrowed.py:  /member/borrowed, /member/{member_id}/borrowed[/{book_id}]
    - health.py:    /healthz

Routes stay thin: parse the body, call one store method, map StoreErrors to
ApiErrors. The status code and body of every failure are decided here.
"""
