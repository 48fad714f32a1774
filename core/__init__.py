"""Search and highlight core"""
