"""PetScan — barcode lookup and pet allergen checks."""
