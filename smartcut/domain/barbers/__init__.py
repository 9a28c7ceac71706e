"""Barber profiles, availability and their services"""
