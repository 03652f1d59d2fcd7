"""Board the Z onboarding service - core package"""
