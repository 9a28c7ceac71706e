"""Customer reviews of barbers"""
