"""
SecureFiles web gateway
"""
