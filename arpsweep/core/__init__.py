"""
ArpSweep core package: subnet expansion, frame building, interface
selection, vendor lookup and the scan engine.
"""
