"""Registration, login and token issuance"""
