"""Booking, schedules and the appointment lifecycle"""
