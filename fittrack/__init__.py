"""
FitTrack application package.

Daily check-ins (meals, water, sleep, activities) with a remote MongoDB
backend or a local offline-demo store behind one interface.
"""
