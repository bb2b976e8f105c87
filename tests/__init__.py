from driveblob import main

# Settings have to be configured before any test module imports code that
# reads them
main.setup()
