#!/usr/bin/env python3
"""
Database initialization script for the Campus Portal backend
Run this script to create the tables, or with --reset to recreate them
"""

import sys

from app import create_app
from database import reset_database

def main():
    """Main function to initialize database"""
    app = create_app()

    if len(sys.argv) > 1 and sys.argv[1] == '--reset':
        print("WARNING: This will delete all existing data!")
        confirm = input("Are you sure you want to reset the database? (yes/no): ")
        if confirm.lower() == 'yes':
            reset_database(app)
        else:
            print("Database reset cancelled.")
    else:
        # create_app already created any missing tables
        print("Database ready.")

if __name__ == '__main__':
    main()
