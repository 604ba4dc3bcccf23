"""
git-grab Test Suite

Unit tests for the pattern compiler, URL handling, path rendering, the grab
pipeline, clipboard providers, settings and the command line interface.
"""
