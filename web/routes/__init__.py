"""
Blueprints for the SecureFiles web gateway
"""
