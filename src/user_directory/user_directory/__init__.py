"""User Directory package.

This package is organized by feature modules (users, ...) with a thin Flask
controller layer and service/repository layers underneath.
"""
