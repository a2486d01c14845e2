"""
tagview: an interactive terminal browser for DICOM-style tag records.

The tree engine (tagview.tree) is independent of the terminal UI and can be
used on its own:

    from tagview.data_loader import load_tag_records
    from tagview.tree import SortMode, TreeNavigator, build_tree, compute_statistics

    records = load_tag_records("study/")
    store, state = build_tree(SortMode.TAG, "study/", records, compute_statistics(records))
    rows = TreeNavigator(store, state).visible_window(page_size=20)
"""

__version__ = "0.1.0"
