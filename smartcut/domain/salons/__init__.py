"""Salon listing and registration"""
