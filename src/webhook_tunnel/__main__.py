from webhook_tunnel.cli import main

main()
