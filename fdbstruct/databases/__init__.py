'''
# Database formats

Formats used to ship tables of data: each of them is a sub-package.
'''
