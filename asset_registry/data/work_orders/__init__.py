from .work_order_record import WorkOrderRecord
