"""
Only the root tests/ directory carries an __init__.py. Subdirectories are namespace
packages (PEP 420), which keeps `tests.helpers` importable from every test module
while test files stay free of package boilerplate. Test module basenames must
therefore be unique across the whole tree.
"""
