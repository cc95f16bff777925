"""
direkcli
~~~~~~~~
Command line client for a direktiv server, spoken over gRPC.
"""
