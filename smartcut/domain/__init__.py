"""Booking domains: each has schemas, a service layer and a FastAPI router"""
