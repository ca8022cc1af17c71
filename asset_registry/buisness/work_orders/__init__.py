from asset_registry.buisness.work_orders.work_order_log import WorkOrderEntry, WorkOrderLog

__all__ = ['WorkOrderEntry', 'WorkOrderLog']
