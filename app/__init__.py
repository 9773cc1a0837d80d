"""SAKHI notification service.

Layers follow the usual split: ``domain`` entities, ``infrastructure``
(storage, publisher, websockets), ``application`` use cases that produce
notifications, and ``interfaces`` (HTTP routes and the bell view-model).
"""
