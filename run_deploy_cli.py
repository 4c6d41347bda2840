# Main Entry Point
import sys

from amplify_deploy.cli import main

if __name__ == "__main__":
    if len(sys.argv) == 1:
        print("\nMissing required command: deploy | version\n")
        print('Usage example: python run_deploy_cli.py deploy --app-id "d1a2b3" --branch-name "main"\n')
        print("Use --help to see all available options.\n")
        sys.exit(1)
    sys.exit(main())
