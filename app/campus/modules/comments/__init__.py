"""
Comments module: threaded replies under a post, oldest first.
"""
