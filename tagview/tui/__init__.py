"""
Terminal UI for browsing tag records.

A Textual-based terminal UI that shows one or many decoded tag records as a
collapsible tree, either per record or merged by tag across records.

Usage:
    tagview study/
    python -m tagview.tui.app study.jsonl --sort diff

Components:
    - TagBrowserApp: Main application class
    - TagTreeView: Tree widget driven by a TreeNavigator
    - HelpModal: Key reference
    - LoadingScreen: Progress while records load in the background
"""
