# Services package init
"""
Storefront Backend — Services Layer
=====================================

What:  Business logic between the routes (HTTP) and the database.
How:   Services take an AsyncSession plus plain values, enforce the domain
       rules, flush, and return ORM objects. The request's session commits.

Service Inventory:
    - RegionService: regions and their countries
    - StoreService / CurrencyService: the store record and currencies
    - UserService / AuthService: admin users, login, password reset
    - CustomerService: storefront customers
    - StockLocationService: stock locations and their addresses
    - AbstractFileService / LocalFileService: file storage contract and the
      local disk implementation
    - ExportService: CSV exports written through the file service
"""
