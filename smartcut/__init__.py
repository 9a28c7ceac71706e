"""SmartCut: salon and barber appointment booking API"""
