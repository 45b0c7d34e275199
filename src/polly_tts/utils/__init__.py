"""
Utility Modules for polly-tts.

    - timeit.py: Performance measurement utilities
"""
