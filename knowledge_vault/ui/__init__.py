"""NiceGUI interface - thin visualization layer over the knowledge vault store.

Responsibilities:
    - Login / signup forms while no token is held
    - File list with upload, download, delete and pipeline stage buttons
    - Question box answered against the active file
    - Busy overlay and toasts mirroring the notification center

Contains no business logic. Every action calls one store operation and
re-renders.
"""
