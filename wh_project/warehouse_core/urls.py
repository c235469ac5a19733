from django.urls import path

from . import views

app_name = "warehouse_core"

urlpatterns = [
    # clients
    path("clients/", views.client_list, name="client-list"),
    path("clients/<int:pk>/", views.client_detail, name="client-detail"),
    path("clients/<int:pk>/statement/", views.client_statement, name="client-statement"),
    path("clients/<int:pk>/reconcile/", views.client_reconcile, name="client-reconcile"),
    # suppliers and their purchases
    path("suppliers/", views.supplier_list, name="supplier-list"),
    path("suppliers/<int:pk>/", views.supplier_detail, name="supplier-detail"),
    path("suppliers/<int:pk>/goods/", views.supplier_goods, name="supplier-goods"),
    path("suppliers/<int:pk>/invoices/", views.supplier_invoices, name="supplier-invoices"),
    path("suppliers/<int:pk>/statement/", views.supplier_statement, name="supplier-statement"),
    path("suppliers/<int:pk>/reconcile/", views.supplier_reconcile, name="supplier-reconcile"),
    # catalog
    path("products/", views.product_list, name="product-list"),
    path("products/low-stock/", views.product_low_stock, name="product-low-stock"),
    path("products/<int:pk>/", views.product_detail, name="product-detail"),
    path("products/<int:pk>/stock/", views.product_stock, name="product-stock"),
    # documents
    path("orders/", views.order_list, name="order-list"),
    path("orders/<int:pk>/", views.order_detail, name="order-detail"),
    path("orders/<int:pk>/status/", views.order_status, name="order-status"),
    path("payments/", views.payment_list, name="payment-list"),
    path("payments/<int:pk>/", views.payment_detail, name="payment-detail"),
    path("purchases/", views.purchase_list, name="purchase-list"),
    path("purchases/<int:pk>/", views.purchase_detail, name="purchase-detail"),
    path("credit-notes/", views.credit_note_list, name="credit-note-list"),
    path("credit-notes/<int:pk>/", views.credit_note_detail, name="credit-note-detail"),
    path("credit-notes/<int:pk>/status/", views.credit_note_status, name="credit-note-status"),
    path("expenses/", views.expense_list, name="expense-list"),
    path("expenses/<int:pk>/", views.expense_detail, name="expense-detail"),
    # administrative repair
    path("counters/<slug:series>/resync/", views.counter_resync, name="counter-resync"),
]
