from product_api.main import run

run()
