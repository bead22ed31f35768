"""
ArpSweep utilities package.
"""
