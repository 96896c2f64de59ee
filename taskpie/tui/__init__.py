"""Terminal user interface for taskpie (Textual).

- app: TaskPieApp, the application
- widgets: PieView and TaskPanel
- screens: confirmation and help modals
"""
